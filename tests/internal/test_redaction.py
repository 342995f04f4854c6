"""Tests for redaction of debug output."""

from case_management_sdk._internal.redaction import (
    REDACTED_VALUE,
    redact_payload,
)


class TestRedactPayload:
    """Tests for redact_payload()."""

    def test_redacts_sensitive_keys(self):
        """Should mask credential-like keys at the top level."""
        payload = {"apikey": "abc", "comment": "visible"}
        assert redact_payload(payload) == {"apikey": REDACTED_VALUE, "comment": "visible"}

    def test_case_insensitive(self):
        """Should match keys regardless of case."""
        assert redact_payload({"Authorization": "Bearer x"}) == {"Authorization": REDACTED_VALUE}

    def test_nested_dicts_and_lists(self):
        """Should walk nested containers."""
        payload = {
            "watchlist": [{"user_id": "abc@ibm.com", "token": "t"}],
            "eu": {"supported": True},
        }
        assert redact_payload(payload) == {
            "watchlist": [{"user_id": "abc@ibm.com", "token": REDACTED_VALUE}],
            "eu": {"supported": True},
        }

    def test_does_not_mutate_input(self):
        """Should leave the original payload untouched."""
        payload = {"nested": {"password": "p"}}
        redact_payload(payload)
        assert payload == {"nested": {"password": "p"}}

    def test_non_container_passthrough(self):
        """Should return scalars and strings unchanged."""
        assert redact_payload("plain text") == "plain text"
        assert redact_payload(None) is None
