from __future__ import annotations

import pytest

from goldprice.core.data.sources.sina import (
    RateLineLayout,
    extract_fields,
    parse_rate_fields,
    parse_sina_payload,
)
from goldprice.core.exceptions import PayloadParseError

XAU = 'var hq_str_hf_XAU="2034.50,2031.10,2034.50,2035.20,2038.00,2028.70,15:29:58,2031.10,2030.00,0,0,0,2023-10-23,伦敦金";'
AUTD = 'var hq_str_gds_AUTD="478.20,0,477.90,478.30,479.00,476.50,15:29:58,477.00,477.10,12345,1,2,2023-10-23,黄金延期";'
RATE_QUOTE_TIME = 'var hq_str_USDCNY="15:29:58,7.1795,7.1790,7.1801,7.1823,7.1770,7.1801,7.1805,7.1800,在岸人民币,0.01,2023-10-23";'
RATE_LEGACY = 'var hq_str_USDCNY="美元人民币,7.1801,7.1795,7.1823";'


def test_full_payload_with_quote_time_rate_line() -> None:
    reading = parse_sina_payload("\n".join([XAU, AUTD, RATE_QUOTE_TIME]))

    assert reading.source == "sina"
    assert reading.international == 2034.50
    assert reading.domestic == 478.20
    assert reading.rate == 7.1801
    assert reading.ok


def test_legacy_rate_line_reads_second_field() -> None:
    reading = parse_sina_payload(RATE_LEGACY)

    assert reading.rate == 7.1801
    assert reading.international is None


def test_statements_on_one_line_are_split() -> None:
    reading = parse_sina_payload(XAU + AUTD)

    assert reading.international == 2034.50
    assert reading.domestic == 478.20


def test_bad_field_leaves_other_fields_intact() -> None:
    body = "\n".join([XAU, 'var hq_str_gds_AUTD="n/a,0";', RATE_LEGACY])

    reading = parse_sina_payload(body)

    assert reading.international == 2034.50
    assert reading.domestic is None
    assert reading.rate == 7.1801
    assert reading.error is None


def test_error_set_when_every_known_field_fails() -> None:
    reading = parse_sina_payload('var hq_str_hf_XAU="";\nvar hq_str_USDCNY="15:29:58,7.1";')

    assert reading.error is not None
    assert "international" in reading.error
    assert "rate" in reading.error
    assert not reading.ok


def test_zero_domestic_is_absent() -> None:
    reading = parse_sina_payload('var hq_str_gds_AUTD="0,0,0";')

    assert reading.domestic is None


def test_body_without_known_symbols_is_rejected() -> None:
    with pytest.raises(PayloadParseError) as exc_info:
        parse_sina_payload('var hq_str_sh600000="浦发银行,10.0";')

    assert exc_info.value.provider_name == "sina"


def test_layout_detection() -> None:
    assert RateLineLayout.detect(["15:29:58", "7.1"]) is RateLineLayout.QUOTE_TIME
    assert RateLineLayout.detect(["美元人民币", "7.1"]) is RateLineLayout.LEGACY
    assert RateLineLayout.QUOTE_TIME.rate_index == 3
    assert RateLineLayout.LEGACY.rate_index == 1


def test_short_quote_time_line_is_rejected() -> None:
    with pytest.raises(PayloadParseError) as exc_info:
        parse_rate_fields(["15:29:58", "7.1", "7.2"])

    assert exc_info.value.field == "rate"


def test_extract_fields_requires_quotes() -> None:
    assert extract_fields('var hq_str_X="a,b";') == ["a", "b"]
    with pytest.raises(PayloadParseError):
        extract_fields("var hq_str_X=;")
