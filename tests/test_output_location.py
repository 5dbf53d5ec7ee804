import pytest

from athena_ops.db.utils import QueryOutputLocation, parse_output_location
from athena_ops.exceptions.errors import MalformedLocationError


def test_parse_bucket_and_nested_key():
    loc = parse_output_location("s3://bucket1/some/key/path")
    assert loc.bucket == "bucket1"
    assert loc.key == "some/key/path"
    assert loc.url == "s3://bucket1/some/key/path"
    assert loc.scheme == "s3"


def test_other_schemes_accepted():
    loc = parse_output_location("s3a://results/q.csv")
    assert loc.scheme == "s3a"
    assert loc.bucket == "results"


def test_parse_is_idempotent():
    url = "s3://query-results/athena/2020/01/q-1.csv"
    assert parse_output_location(url) == parse_output_location(url)


def test_location_is_immutable():
    loc = parse_output_location("s3://b/k")
    with pytest.raises(AttributeError):
        loc.bucket = "other"
    assert isinstance(loc, QueryOutputLocation)


@pytest.mark.parametrize(
    "url",
    [
        "not-a-url",
        "bucket/key",
        "s3://bucket",
        "s3://bucket/",
        "s3:///key",
        "s3://my bucket/key",
        "s3://bucket/key with space",
        "",
        None,
    ],
)
def test_malformed_locations(url):
    with pytest.raises(MalformedLocationError):
        parse_output_location(url)
