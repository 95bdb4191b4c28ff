"""Tests for the error-to-HTTP mapping, the admin guard and route-to-domain resolution."""

import pytest
from fastapi.testclient import TestClient
from protean.exceptions import (
    DatabaseError,
    ExpectedVersionError,
    InvalidOperationError,
    ObjectNotFoundError,
    ValidationError,
)
from shared.api import error_message, status_code_for
from shared.exceptions import (
    DuplicateEmailError,
    EmptyCartError,
    InvalidCredentialsError,
    InvalidTransitionError,
    UnauthenticatedError,
)


@pytest.mark.parametrize(
    "exc, status_code",
    [
        (ValidationError({"name": ["Name is required"]}), 400),
        (EmptyCartError(), 400),
        (DuplicateEmailError(), 409),
        (InvalidCredentialsError(), 401),
        (UnauthenticatedError(), 401),
        (ObjectNotFoundError("Order not found"), 404),
        (InvalidTransitionError("Cannot transition from delivered to pending"), 409),
        (ExpectedVersionError("stale"), 409),
        (InvalidOperationError("nope"), 422),
        (DatabaseError("disk full"), 500),
    ],
)
def test_status_code_for(exc, status_code):
    assert status_code_for(exc) == status_code


class TestErrorMessage:
    def test_first_field_message(self):
        exc = ValidationError({"phone": ["Please enter a valid phone number"], "city": ["Please enter your city"]})
        assert error_message(exc) == "Please enter a valid phone number"

    def test_empty_cart_is_validation_error(self):
        exc = EmptyCartError()
        assert isinstance(exc, ValidationError)
        assert exc.messages == {"cart": ["Cannot check out an empty cart"]}
        assert error_message(exc) == "Cannot check out an empty cart"

    def test_plain_exception_uses_its_argument(self):
        assert error_message(ObjectNotFoundError("Product not found")) == "Product not found"

    def test_stale_version_message(self):
        assert error_message(ExpectedVersionError("v3 != v2")).startswith("Record was modified")

    def test_storage_failure_hides_details(self):
        assert error_message(DatabaseError("password authentication failed")) == "Storage failure"


class TestErrorResponses:
    def test_validation_error_body(self, client):
        response = client.post("/api/auth/signup", json={"email": "", "password": "x", "name": "Amina"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Email is required"
        assert body["messages"] == {"email": ["Email is required"]}

    def test_not_found_body_has_no_messages(self, client):
        response = client.get("/api/admin/orders/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}


class TestAdminGuard:
    @pytest.fixture
    def guarded_client(self, settings, identity_bed, ordering_bed, content_bed):
        from app import create_app

        guarded = settings.model_copy(update={"admin_token": "let-me-in"})
        return TestClient(create_app(settings=guarded, init_domains=False))

    def test_admin_routes_open_without_token_configured(self, client):
        assert client.get("/api/admin/orders").status_code == 200

    def test_missing_token_rejected(self, guarded_client):
        response = guarded_client.get("/api/admin/orders")
        assert response.status_code == 401
        assert response.json() == {"error": "Admin access required"}

    def test_wrong_token_rejected(self, guarded_client):
        response = guarded_client.get("/api/admin/orders", headers={"X-Admin-Token": "guess"})
        assert response.status_code == 401

    def test_matching_token_accepted(self, guarded_client):
        response = guarded_client.get("/api/admin/orders", headers={"X-Admin-Token": "let-me-in"})
        assert response.status_code == 200

    def test_public_routes_stay_open(self, guarded_client):
        assert guarded_client.get("/api/content/products").status_code == 200


class TestRouteDomains:
    @pytest.mark.parametrize(
        "path, domain_name",
        [
            ("/api/auth/login", "identity"),
            ("/api/admin/users", "identity"),
            ("/api/admin/orders/stats", "ordering"),
            ("/api/carts/guest-1/items", "ordering"),
            ("/api/orders", "ordering"),
            ("/api/admin/products", "content"),
            ("/api/content/settings", "content"),
        ],
    )
    def test_longest_prefix_wins(self, path, domain_name):
        from app import _resolve_domain

        assert _resolve_domain(path, "/api").name == domain_name

    def test_unmapped_paths(self):
        from app import _resolve_domain

        assert _resolve_domain("/health", "/api") is None
        assert _resolve_domain("/docs", "/api") is None
