#!/usr/bin/env python3
"""
Journey visualization using folium maps.
"""

from html import escape
from typing import Set
import logging

import folium
from folium.template import Template

from .config import TravelConfig
from .formatting import format_timestamp
from .journey import Journey
from .position import Position
from .stats import TravelStats

logger = logging.getLogger(__name__)

PRIMARY_COLOR = "#ae3c40"
PATH_COLOR = "#1f2937"
DAILY_COLOR = "#6b7280"


class JourneyLegend(folium.MacroElement):
    """Legend with night-stop and daily-position counts."""

    def __init__(self, stats: TravelStats):
        super().__init__()
        self.night_count = stats.night_count
        self.daily_count = stats.position_count - stats.night_count
        self.total_distance = f"{stats.total_distance_km:.1f}"
        self.duration_days = stats.duration_days

        self._template = Template(
            """
        {% macro html(this, kwargs) %}
        <div id="journey-legend" style="
            position: fixed;
            bottom: 50px;
            left: 50px;
            width: 220px;
            background-color: white;
            border: 2px solid grey;
            z-index: 9999;
            font-size: 13px;
            padding: 12px;
            font-family: 'Courier New', monospace;
            border-radius: 8px;
            box-shadow: 0 4px 6px rgba(0,0,0,0.1);
            box-sizing: border-box;
        ">
            <b>Teckenförklaring</b><br>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: #ae3c40; font-size: 18px;">&#9679;</span>
                Nattstopp ({{ this.night_count }})
            </div>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: #6b7280; font-size: 14px;">&#9679;</span>
                Dagspositioner ({{ this.daily_count }})
            </div>
            <div style="margin: 4px 0; line-height: 1.3;">
                <span style="color: #1f2937; font-weight: bold;">- - -</span>
                {{ this.total_distance }} km, {{ this.duration_days }} dagar
            </div>
        </div>
        {% endmacro %}
        """
        )


def popup_title(index: int, count: int, is_night_stop: bool) -> str:
    """Popup heading for the position at ``index`` of ``count``."""
    if index == 0:
        return "🚀 Resans början"
    if index == count - 1:
        return "🏁 Nuvarande position"
    if is_night_stop:
        return "🌙 Nattstopp"
    return f"📍 Stopp {index + 1}"


def position_to_html(
    position: Position, title: str, home_timezone: str
) -> str:
    """
    Format a position into HTML for popup display.

    Args:
        position: The position to describe
        title: Heading line
        home_timezone: Timezone the timestamp is shown in

    Returns:
        HTML-formatted string
    """
    html_parts = [
        "<div style='min-width: 180px'>",
        f"<h4 style='margin: 0 0 8px 0; color: {PRIMARY_COLOR}'>{title}</h4>",
        f"<div style='margin-bottom: 4px; color: #666; font-weight: bold'>"
        f"📅 {format_timestamp(position.recorded_at, home_timezone)}</div>",
        f"<div style='color: #666; font-weight: bold'>"
        f"🌍 {position.latitude:.5f}, {position.longitude:.4f}</div>",
    ]

    place = ", ".join(part for part in (position.city, position.country) if part)
    if place:
        html_parts.append(f"<div>{escape(place)}</div>")

    for note in position.notes:
        html_parts.append(f"<div><i>{escape(note.text)}</i></div>")

    html_parts.append("</div>")
    return "".join(html_parts)


def create_journey_map(
    journey: Journey,
    output_filename: str,
    night_stops: Set[str],
    stats: TravelStats,
    config: TravelConfig,
) -> None:
    """
    Create an interactive map of the journey and save it as HTML.

    Args:
        journey: Journey to draw
        output_filename: Path where HTML map file should be saved
        night_stops: Ids of positions drawn as night stops
        stats: TravelStats shown in the legend
        config: TravelConfig with bbox buffer and home timezone

    Raises:
        ValueError: If journey is empty
    """
    if not journey:
        raise ValueError("Cannot create map for empty journey")

    south, west, north, east = journey.get_bbox(config.bbox_buffer)
    center_lat = (south + north) / 2
    center_lon = (west + east) / 2

    logger.debug(f"Creating map centered at ({center_lat:.4f}, {center_lon:.4f})")

    journey_map = folium.Map(location=[center_lat, center_lon], tiles=None)

    folium.TileLayer(
        tiles="CartoDB positron",
        attr=(
            "&copy; <a href='https://www.openstreetmap.org/copyright'>OpenStreetMap</a> "
            "contributors &copy; <a href='https://carto.com/attributions'>CARTO</a>"
        ),
        name="Standard",
        control=True,
        show=True,
    ).add_to(journey_map)

    folium.TileLayer(
        tiles="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
        attr=(
            "Tiles &copy; Esri &mdash; Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, "
            "Getmapping, Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community"
        ),
        name="Satellite",
        control=True,
        show=False,
    ).add_to(journey_map)

    folium.LayerControl().add_to(journey_map)

    if len(journey) > 1:
        folium.PolyLine(
            [[p.latitude, p.longitude] for p in journey],
            color=PATH_COLOR,
            weight=3,
            opacity=0.7,
            dash_array="4, 8",
        ).add_to(journey_map)

    count = len(journey)
    for index, position in enumerate(journey):
        is_night_stop = position.id in night_stops
        popup = folium.Popup(
            position_to_html(
                position,
                popup_title(index, count, is_night_stop),
                config.home_timezone,
            ),
            max_width=300,
        )
        location = [position.latitude, position.longitude]

        if is_night_stop:
            folium.Marker(
                location,
                popup=popup,
                icon=folium.Icon(color="darkred", icon="moon", prefix="fa"),
            ).add_to(journey_map)
        else:
            folium.CircleMarker(
                location,
                radius=4,
                color="white",
                weight=1,
                fill=True,
                fill_color=DAILY_COLOR,
                fill_opacity=0.9,
                popup=popup,
            ).add_to(journey_map)

    journey_map.add_child(JourneyLegend(stats))

    journey_map.fit_bounds([[south, west], [north, east]])
    journey_map.save(output_filename)

    logger.debug(
        f"Map saved to {output_filename} with {stats.night_count} night stops and {count - stats.night_count} daily positions"
    )
