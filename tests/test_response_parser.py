import httpx
import pytest

from services.copyleaks.response_parser import extract_error_message, parse_detection, parse_json_object
from utils.errors import UpstreamFailure


def test_human_defaults_to_complement_of_ai():
    result = parse_detection({"summary": {"ai": 73}})
    assert result.ai_percentage == 73
    assert result.human_percentage == 27


def test_missing_ai_defaults_to_zero():
    result = parse_detection({})
    assert result.ai_percentage == 0
    assert result.human_percentage == 100


def test_upstream_human_is_kept():
    result = parse_detection({"summary": {"ai": 60.5, "human": 39.5}})
    assert result.human_percentage == 39.5


def test_dimensions_absent_stay_none():
    result = parse_detection({"summary": {"ai": 10}})
    assert result.width is None
    assert result.height is None


def test_dimensions_are_read():
    result = parse_detection({"summary": {"ai": 10}, "imageInfo": {"width": 1024, "height": 768}})
    assert (result.width, result.height) == (1024, 768)


def test_non_numeric_ai_is_malformed():
    with pytest.raises(UpstreamFailure):
        parse_detection({"summary": {"ai": "high"}})


def test_non_object_body_is_malformed():
    with pytest.raises(UpstreamFailure):
        parse_json_object(httpx.Response(200, json=[1, 2, 3]))
    with pytest.raises(UpstreamFailure):
        parse_json_object(httpx.Response(200, text="<html>oops</html>"))


def test_error_message_prefers_message_field():
    assert extract_error_message(httpx.Response(429, json={"message": "Slow down"})) == "Slow down"
    assert extract_error_message(httpx.Response(502, text="bad gateway")) == "bad gateway"


@pytest.mark.parametrize("summary", [{"ai": float("nan")}, {"ai": 40, "human": float("inf")}])
def test_non_finite_scores_are_malformed(summary):
    with pytest.raises(UpstreamFailure):
        parse_detection({"summary": summary})


def test_non_finite_dimensions_stay_none():
    result = parse_detection({"summary": {"ai": 5}, "imageInfo": {"width": float("inf"), "height": 300}})
    assert result.width is None
    assert result.height == 300


@pytest.mark.parametrize("body", ['{"summary": {"ai": NaN}}', '{"imageInfo": {"width": Infinity}}'])
def test_nan_and_infinity_tokens_are_refused(body):
    with pytest.raises(UpstreamFailure):
        parse_json_object(httpx.Response(200, text=body))


def test_markup_error_body_falls_back_to_reason_phrase():
    page = "<html><body><h1>502 Bad Gateway</h1></body></html>"
    assert extract_error_message(httpx.Response(502, text=page)) == "Bad Gateway"
    assert extract_error_message(httpx.Response(500, text="x" * 500)) == "Internal Server Error"
