import pytest
from identity.shared.email import normalize_email
from protean.exceptions import ValidationError


class TestNormalizeEmail:
    def test_trims_and_lowercases(self):
        assert normalize_email("  Amina.Khan@Example.COM ") == "amina.khan@example.com"

    def test_plus_addressing_allowed(self):
        assert normalize_email("amina+cakes@example.com") == "amina+cakes@example.com"

    def test_empty_is_required_error(self):
        with pytest.raises(ValidationError) as exc:
            normalize_email("   ")
        assert exc.value.messages == {"email": ["Email is required"]}

    def test_none_is_required_error(self):
        with pytest.raises(ValidationError):
            normalize_email(None)

    @pytest.mark.parametrize(
        "email",
        [
            "no-at-sign.com",
            "two@@example.com",
            "a@b@example.com",
            "@example.com",
            "amina@",
            "amina@localhost",
            "amina@.example.com",
            "amina@example.com.",
            ".amina@example.com",
            "amina.@example.com",
            "ami..na@example.com",
            "amina@exa..mple.com",
            "amina@-example.com",
            "amina@example-.com",
            "ami na@example.com",
            "amina;x@example.com",
            "<amina>@example.com",
        ],
    )
    def test_structurally_invalid(self, email):
        with pytest.raises(ValidationError) as exc:
            normalize_email(email)
        assert "email" in exc.value.messages
