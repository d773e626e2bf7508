"""
Tests for log payload redaction in resumesync.utils.logger.
"""

from resumesync.utils.logger import sanitize


class TestSanitize:
    def test_contact_fields_redacted(self):
        data = {"first_name": "Ada", "email": "ada@example.com", "phone": "+90 555"}
        assert sanitize(data) == {
            "first_name": "Ada",
            "email": "***REDACTED***",
            "phone": "***REDACTED***",
        }

    def test_nested_structures(self):
        data = {"certificates": [{"name": "CKA", "credential_id": "abc-123"}], "api_key": "k"}
        assert sanitize(data) == {
            "certificates": [{"name": "CKA", "credential_id": "***REDACTED***"}],
            "api_key": "***REDACTED***",
        }

    def test_scalars_pass_through(self):
        assert sanitize("plain") == "plain"
        assert sanitize(None) is None
