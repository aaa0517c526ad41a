import pytest

from akcompass.fileio import load_parameters, save_parameters
from akcompass.vector import CompassError, Vec3


def test_save_writes_fixed_format(tmp_path):
    path = tmp_path / "akmdfs.txt"
    save_parameters(path, Vec3(1.5, -2.25, 3.0))
    assert path.read_text() == "HO.x = 1.500000\nHO.y = -2.250000\nHO.z = 3.000000\n"


def test_round_trip(tmp_path):
    path = tmp_path / "akmdfs.txt"
    offset = Vec3(12.5, -0.125, 300.75)
    save_parameters(path, offset)
    assert load_parameters(path) == offset


def test_load_accepts_loose_whitespace(tmp_path):
    path = tmp_path / "akmdfs.txt"
    path.write_text("  HO.x   =  1.0\n\nHO.y =\t2e1\nHO.z = -3\nextra stuff\n")
    assert load_parameters(path) == Vec3(1.0, 20.0, -3.0)


def test_load_accepts_str_path(tmp_path):
    path = tmp_path / "akmdfs.txt"
    path.write_text("HO.x = 4.0\nHO.y = 5.0\nHO.z = 6.0\n")
    assert load_parameters(str(path)) == Vec3(4.0, 5.0, 6.0)


@pytest.mark.parametrize(
    "content",
    [
        "HO.y = 1.0\nHO.x = 2.0\nHO.z = 3.0\n",
        "HO.x = 1.0\nHO.y = 2.0\n",
        "HO.x=1.0\nHO.y=2.0\nHO.z=3.0\n",
        "HO.x = abc\nHO.y = 2.0\nHO.z = 3.0\n",
        "HO.x 1.0\nHO.y 2.0\nHO.z 3.0\n",
        "",
    ],
)
def test_load_rejects_malformed_files(tmp_path, content):
    path = tmp_path / "akmdfs.txt"
    path.write_text(content)
    with pytest.raises(CompassError):
        load_parameters(path)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(CompassError):
        load_parameters(tmp_path / "missing.txt")


def test_save_to_missing_directory_raises(tmp_path):
    with pytest.raises(CompassError):
        save_parameters(tmp_path / "no" / "such" / "file.txt", Vec3(1.0, 2.0, 3.0))