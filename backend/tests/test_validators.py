import pytest

from core.exceptions import ValidationError
from utils.validators import validate_quality, validate_video_id


@pytest.mark.parametrize("video_id", ["dQw4w9WgXcQ", "abc", "a-b_c", "X"])
def test_valid_video_ids(video_id):
    assert validate_video_id(video_id) == video_id


@pytest.mark.parametrize("video_id", ["", "abc def", "abc&list=1", "../etc", "a" * 65, "абв"])
def test_invalid_video_ids(video_id):
    with pytest.raises(ValidationError) as exc_info:
        validate_video_id(video_id)

    assert exc_info.value.status_code == 400


def test_video_id_max_length_is_configurable():
    assert validate_video_id("a" * 11, max_length=11) == "a" * 11
    with pytest.raises(ValidationError):
        validate_video_id("a" * 12, max_length=11)


@pytest.mark.parametrize("quality", [
    "bestaudio",
    "worstaudio",
    "140",
    "bestaudio[ext=m4a]/bestaudio",
    "bv*+ba/b",
    "ba[abr<=128]",
])
def test_valid_quality_selectors(quality):
    assert validate_quality(quality) == quality


@pytest.mark.parametrize("quality", ["-x", "--exec=id", "best audio", "best;rm", "a" * 201])
def test_invalid_quality_selectors(quality):
    with pytest.raises(ValidationError):
        validate_quality(quality)


def test_missing_quality_falls_back_to_default():
    assert validate_quality(None) == "bestaudio"
    assert validate_quality("") == "bestaudio"
    assert validate_quality(None, default="worstaudio") == "worstaudio"
