"""PII masking and log formatting."""
import json
import logging

from app.logging_config import (
    ContextFilter,
    HumanFormatter,
    JSONFormatter,
    mask_pii,
    organization_id_ctx,
    request_id_ctx,
)


def _record(msg, *args):
    record = logging.LogRecord("scanstreet.test", logging.INFO, __file__, 1, msg, args, None)
    ContextFilter().filter(record)
    return record


def test_mask_email_and_phone():
    text = mask_pii("Report from jane.doe@springfield-mail.com, call (937) 555-0142")
    assert "jane.doe" not in text
    assert "j***@springfield-mail.com" in text
    assert "555-0142" not in text
    assert "***-0142" in text


def test_mask_secrets():
    text = mask_pii('{"password": "hunter22", "stripe_secret_key": "abc"} key sk_live_51Habc Bearer eyJhbGc.x.y')
    assert "hunter22" not in text
    assert '"stripe_secret_key": "***"' in text
    assert "sk_live_***" in text
    assert "eyJhbGc" not in text


def test_plain_text_untouched():
    assert mask_pii("Fetched 42 road segments in 12.5ms") == "Fetched 42 road segments in 12.5ms"


def test_json_formatter_includes_context():
    rid = request_id_ctx.set("abc123")
    oid = organization_id_ctx.set("org-1")
    try:
        record = _record("User %s signed in", "ops@springfield-city.com")
    finally:
        request_id_ctx.reset(rid)
        organization_id_ctx.reset(oid)

    entry = json.loads(JSONFormatter().format(record))
    assert entry["request_id"] == "abc123"
    assert entry["organization_id"] == "org-1"
    assert "user_id" not in entry
    assert entry["msg"] == "User o***@springfield-city.com signed in"


def test_human_formatter_masks_message():
    line = HumanFormatter().format(_record("Invite for %s", "crew@springfield-city.com"))
    assert "c***@springfield-city.com" in line
    assert "[- org=-]" in line
