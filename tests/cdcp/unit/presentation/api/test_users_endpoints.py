"""Tests for the /users endpoints."""

import json

import pytest

from cdcp.domain.user import (
    EmailAlreadyExistsError,
    User,
    UserAttribute,
    UserNotFoundError,
)

JSON_PATCH = "application/json-patch+json"
MERGE_PATCH = "application/merge-patch+json"


@pytest.fixture
def user():
    return User.create(
        email="user@example.com",
        attributes=[UserAttribute("province", "ON")],
    )


class TestCreateUser:
    def test_create_user(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
        db_session_mock,
        audit_sink,
        user,
    ):
        user_service.create_user.return_value = user

        response = test_client.post(
            f"{api_v1_prefix}/users",
            json={
                "email": "user@example.com",
                "userAttributes": [{"name": "province", "value": "ON"}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == user.id
        assert data["email"] == "user@example.com"
        assert data["emailVerified"] is False
        assert data["userAttributes"] == [{"name": "province", "value": "ON"}]

        user_service.create_user.assert_awaited_once_with(
            email="user@example.com",
            attributes=[UserAttribute("province", "ON")],
        )
        db_session_mock.commit.assert_awaited_once()
        audit_sink.record.assert_called_once()
        assert audit_sink.record.call_args.kwargs["event_type"] == "user.created"
        assert audit_sink.record.call_args.kwargs["actor"] == "test-client"

    def test_create_user_with_empty_body(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
    ):
        user_service.create_user.return_value = User.create()

        response = test_client.post(f"{api_v1_prefix}/users", json={}, headers=auth_headers)

        assert response.status_code == 201
        assert response.json()["email"] is None

    def test_invalid_email_is_rejected(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
    ):
        response = test_client.post(
            f"{api_v1_prefix}/users",
            json={"email": "not-an-email"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert [e["field"] for e in data["errors"]] == ["email"]
        user_service.create_user.assert_not_called()

    def test_duplicate_email_conflicts(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
        audit_sink,
    ):
        user_service.create_user.side_effect = EmailAlreadyExistsError("user@example.com")

        response = test_client.post(
            f"{api_v1_prefix}/users",
            json={"email": "user@example.com"},
            headers=auth_headers,
        )

        assert response.status_code == 409
        assert response.json()["code"] == "EMAIL_ALREADY_EXISTS"
        audit_sink.record.assert_not_called()


class TestGetUser:
    def test_get_user(self, test_client, api_v1_prefix, auth_headers, user_service, user):
        user_service.get_user.return_value = user

        response = test_client.get(f"{api_v1_prefix}/users/{user.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["id"] == user.id
        assert "createdAt" in response.json()

    def test_unknown_user_is_not_found(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
    ):
        user_service.get_user.side_effect = UserNotFoundError("missing")

        response = test_client.get(f"{api_v1_prefix}/users/missing", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {
            "detail": "No user with id=[missing] was found",
            "code": "USER_NOT_FOUND",
        }


class TestPatchUser:
    @pytest.fixture(autouse=True)
    def _user(self, user_service, user):
        user_service.get_user.return_value = user
        user_service.update_user.return_value = user

    def _patch(self, client, prefix, headers, user_id, body, content_type):
        return client.patch(
            f"{prefix}/users/{user_id}",
            content=json.dumps(body),
            headers={**headers, "Content-Type": content_type},
        )

    def test_merge_patch_changes_email(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
        db_session_mock,
        audit_sink,
        user,
    ):
        response = self._patch(
            test_client,
            api_v1_prefix,
            auth_headers,
            user.id,
            {"email": "new@example.com"},
            MERGE_PATCH,
        )

        assert response.status_code == 204
        user_service.update_user.assert_awaited_once_with(
            user.id,
            email="new@example.com",
            attributes=[UserAttribute("province", "ON")],
        )
        db_session_mock.commit.assert_awaited_once()
        assert audit_sink.record.call_args.kwargs["payload"]["mediaType"] == MERGE_PATCH

    def test_merge_patch_null_removes_email(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
        user,
    ):
        response = self._patch(
            test_client,
            api_v1_prefix,
            auth_headers,
            user.id,
            {"email": None},
            MERGE_PATCH,
        )

        assert response.status_code == 204
        assert user_service.update_user.call_args.kwargs["email"] is None

    def test_json_patch_adds_attribute(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
        user,
    ):
        response = self._patch(
            test_client,
            api_v1_prefix,
            auth_headers,
            user.id,
            [
                {
                    "op": "add",
                    "path": "/userAttributes/-",
                    "value": {"name": "channel", "value": "email"},
                },
            ],
            JSON_PATCH,
        )

        assert response.status_code == 204
        assert user_service.update_user.call_args.kwargs["attributes"] == [
            UserAttribute("province", "ON"),
            UserAttribute("channel", "email"),
        ]

    def test_content_type_parameters_are_accepted(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user,
    ):
        response = self._patch(
            test_client,
            api_v1_prefix,
            auth_headers,
            user.id,
            {"email": "new@example.com"},
            f"{MERGE_PATCH}; charset=utf-8",
        )

        assert response.status_code == 204

    def test_plain_json_is_unsupported(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
        user,
    ):
        response = self._patch(
            test_client,
            api_v1_prefix,
            auth_headers,
            user.id,
            {"email": "new@example.com"},
            "application/json",
        )

        assert response.status_code == 415
        assert response.json()["code"] == "UNSUPPORTED_MEDIA_TYPE"
        user_service.get_user.assert_not_called()

    def test_unknown_field_is_rejected(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
        user,
    ):
        response = self._patch(
            test_client,
            api_v1_prefix,
            auth_headers,
            user.id,
            {"emailVerified": True},
            MERGE_PATCH,
        )

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["errors"]] == ["emailVerified"]
        user_service.update_user.assert_not_called()

    def test_invalid_email_is_rejected(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
        user,
    ):
        response = self._patch(
            test_client,
            api_v1_prefix,
            auth_headers,
            user.id,
            [{"op": "replace", "path": "/email", "value": "nope"}],
            JSON_PATCH,
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "email"
        user_service.update_user.assert_not_called()

    def test_attribute_rules_are_all_reported(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
        user,
    ):
        response = self._patch(
            test_client,
            api_v1_prefix,
            auth_headers,
            user.id,
            {
                "userAttributes": [
                    {"name": " ", "value": "x"},
                    {"name": "a"},
                    {"name": "a"},
                ],
            },
            MERGE_PATCH,
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"field": "userAttributes.0.name", "message": "must not be blank"},
            {"field": "userAttributes.2.name", "message": "duplicate attribute name"},
        ]
        user_service.update_user.assert_not_called()

    def test_failed_test_operation_is_malformed(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user,
    ):
        response = self._patch(
            test_client,
            api_v1_prefix,
            auth_headers,
            user.id,
            [{"op": "test", "path": "/email", "value": "other@example.com"}],
            JSON_PATCH,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "MALFORMED_PATCH"

    def test_invalid_json_is_malformed(self, test_client, api_v1_prefix, auth_headers, user):
        response = test_client.patch(
            f"{api_v1_prefix}/users/{user.id}",
            content=b"{not json",
            headers={**auth_headers, "Content-Type": MERGE_PATCH},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "MALFORMED_PATCH"

    def test_unknown_user_is_not_found(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
    ):
        user_service.get_user.side_effect = UserNotFoundError("missing")

        response = self._patch(
            test_client,
            api_v1_prefix,
            auth_headers,
            "missing",
            {"email": "new@example.com"},
            MERGE_PATCH,
        )

        assert response.status_code == 404


class TestDeleteUser:
    def test_delete_user(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
        db_session_mock,
        audit_sink,
    ):
        response = test_client.delete(f"{api_v1_prefix}/users/u1", headers=auth_headers)

        assert response.status_code == 204
        user_service.delete_user.assert_awaited_once_with("u1")
        db_session_mock.commit.assert_awaited_once()
        assert audit_sink.record.call_args.kwargs["event_type"] == "user.deleted"

    def test_delete_unknown_user(
        self,
        test_client,
        api_v1_prefix,
        auth_headers,
        user_service,
        db_session_mock,
    ):
        user_service.delete_user.side_effect = UserNotFoundError("missing")

        response = test_client.delete(f"{api_v1_prefix}/users/missing", headers=auth_headers)

        assert response.status_code == 404
        db_session_mock.commit.assert_not_called()
