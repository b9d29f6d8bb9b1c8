import pytest

REPORT = [
    "General",
    "Unique ID                                : 245563453525 (0x392C7A0835)",
    "Complete name                            : /downloads/original.mkv",
    "Format                                   : Matroska",
    "File size                                : 1.37 GiB",
    "",
    "Video",
    "Format                                   : AVC",
]


@pytest.fixture
def report():
    return list(REPORT)
