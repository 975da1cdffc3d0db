import os

from vartarvipavag.file_utils import generate_output_filename


def test_strips_known_extensions(tmp_path):
    for name in ("trip.json", "trip.GPX"):
        result = generate_output_filename(str(tmp_path / name))
        assert os.path.basename(result).startswith("trip map")
        assert os.path.exists(result)


def test_numbered_variants(tmp_path):
    first = generate_output_filename(str(tmp_path / "trip.json"))
    second = generate_output_filename(str(tmp_path / "trip.json"))
    third = generate_output_filename(str(tmp_path / "trip.json"))
    assert os.path.basename(first) == "trip map.html"
    assert os.path.basename(second) == "trip map (1).html"
    assert os.path.basename(third) == "trip map (2).html"


def test_unknown_extension_is_kept(tmp_path):
    result = generate_output_filename(str(tmp_path / "trip.txt"))
    assert os.path.basename(result) == "trip.txt map.html"
