import pytest

from hwtools.filecopy import (
    CopyError,
    OffsetExceedsFileSizeError,
    SameFilesError,
    UnsupportedFileError,
    copy_file,
    main,
)

DATA = bytes(range(256)) * 30  # 7680 bytes


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "input.bin"
    path.write_bytes(DATA)
    return path


@pytest.mark.parametrize(
    "offset, limit, start, end",
    [
        (0, 0, 0, 7680),
        (0, 10, 0, 10),
        (0, 1000, 0, 1000),
        (0, 10000, 0, 7680),
        (100, 1000, 100, 1100),
        (6000, 1000, 6000, 7000),
    ],
)
def test_copy_regular(source, tmp_path, offset, limit, start, end):
    target = tmp_path / "out.bin"
    copy_file(str(source), str(target), offset, limit)
    assert target.read_bytes() == DATA[start:end]


def test_copy_offset_at_end_is_empty(source, tmp_path):
    target = tmp_path / "out.bin"
    copy_file(str(source), str(target), len(DATA), 0)
    assert target.read_bytes() == b""


def test_copy_offset_exceeds_size(source, tmp_path):
    with pytest.raises(OffsetExceedsFileSizeError, match="offset exceeds file size"):
        copy_file(str(source), str(tmp_path / "out.bin"), len(DATA) + 1, 0)


def test_copy_non_regular(tmp_path):
    target = tmp_path / "out.bin"
    copy_file("/dev/urandom", str(target), 0, 1000)
    assert target.stat().st_size == 1000


def test_copy_non_regular_without_limit(tmp_path):
    with pytest.raises(UnsupportedFileError, match="unsupported file"):
        copy_file("/dev/urandom", str(tmp_path / "out.bin"), 0, 0)


def test_copy_same_file(source):
    with pytest.raises(SameFilesError):
        copy_file(str(source), str(source), 0, 0)
    assert source.read_bytes() == DATA


def test_copy_missing_source(tmp_path):
    with pytest.raises(FileNotFoundError):
        copy_file(str(tmp_path / "absent"), str(tmp_path / "out.bin"))


def test_errors_share_base():
    assert issubclass(UnsupportedFileError, CopyError)
    assert str(SameFilesError()) == "from and to files are same"


def test_main_copies(source, tmp_path):
    target = tmp_path / "out.bin"
    main(["-from", str(source), "-to", str(target), "-offset", "2", "-limit", "3"])
    assert target.read_bytes() == bytes([2, 3, 4])


def test_main_reports_failure(tmp_path, capsys):
    with pytest.raises(SystemExit) as info:
        main(["-from", str(tmp_path / "absent"), "-to", str(tmp_path / "out.bin")])
    assert info.value.code == 1
    assert "absent" in capsys.readouterr().err