from uuid import uuid4

from tests.conftest import headers_for


class TestApplicationUsers:
    """Tests for /api/application-users"""

    def test_list(self, client, app_headers, app_user_id):
        response = client.get("/api/application-users", headers=app_headers)

        assert response.status_code == 200
        assert [m["user_id"] for m in response.json()] == [str(app_user_id)]

    def test_grant_gives_full_access(self, client, app_headers, app_user_id, foreign_account):
        new_user = uuid4()

        response = client.post(
            "/api/application-users", headers=app_headers, json={"user_id": str(new_user)}
        )

        assert response.status_code == 201
        assert response.json()["created_user"] == str(app_user_id)

        account_response = client.get(
            f"/api/accounts/{foreign_account.id}", headers=headers_for(new_user)
        )
        assert account_response.status_code == 200

    def test_duplicate_grant_rejected(self, client, app_headers):
        new_user = str(uuid4())
        client.post("/api/application-users", headers=app_headers, json={"user_id": new_user})

        response = client.post(
            "/api/application-users", headers=app_headers, json={"user_id": new_user}
        )

        assert response.status_code == 400

    def test_tenant_user_cannot_manage(self, client, tenant_headers):
        response = client.post(
            "/api/application-users", headers=tenant_headers, json={"user_id": str(uuid4())}
        )

        assert response.status_code == 403
        assert client.get("/api/application-users", headers=tenant_headers).status_code == 403

    def test_revoke(self, client, app_headers):
        new_user = uuid4()
        client.post("/api/application-users", headers=app_headers, json={"user_id": str(new_user)})

        response = client.delete(f"/api/application-users/{new_user}", headers=app_headers)

        assert response.status_code == 204
        assert client.get("/api/application-users", headers=headers_for(new_user)).status_code == 403

    def test_cannot_revoke_self(self, client, app_headers, app_user_id):
        response = client.delete(f"/api/application-users/{app_user_id}", headers=app_headers)

        assert response.status_code == 400

    def test_revoke_unknown(self, client, app_headers):
        response = client.delete(f"/api/application-users/{uuid4()}", headers=app_headers)

        assert response.status_code == 404


class TestTenantUsers:
    """Tests for /api/tenants/{tenant_id}/users"""

    def test_list(self, client, tenant_headers, tenant, tenant_user_id):
        response = client.get(f"/api/tenants/{tenant.id}/users", headers=tenant_headers)

        assert response.status_code == 200
        members = response.json()
        assert len(members) == 1
        assert members[0]["user_id"] == str(tenant_user_id)
        assert members[0]["tenant_id"] == str(tenant.id)

    def test_grant_covers_tenant_accounts(self, client, tenant_headers, tenant, sibling_account):
        new_user = uuid4()

        response = client.post(
            f"/api/tenants/{tenant.id}/users", headers=tenant_headers, json={"user_id": str(new_user)}
        )

        assert response.status_code == 201
        account_response = client.get(
            f"/api/accounts/{sibling_account.id}", headers=headers_for(new_user)
        )
        assert account_response.status_code == 200

    def test_other_tenant_forbidden(self, client, tenant_headers, other_tenant):
        response = client.post(
            f"/api/tenants/{other_tenant.id}/users",
            headers=tenant_headers,
            json={"user_id": str(uuid4())},
        )

        assert response.status_code == 403

    def test_revoke(self, client, app_headers, tenant, tenant_user_id):
        response = client.delete(
            f"/api/tenants/{tenant.id}/users/{tenant_user_id}", headers=app_headers
        )

        assert response.status_code == 204
        tenant_response = client.get(f"/api/tenants/{tenant.id}", headers=headers_for(tenant_user_id))
        assert tenant_response.status_code == 403

    def test_revoke_non_member(self, client, tenant_headers, tenant):
        response = client.delete(f"/api/tenants/{tenant.id}/users/{uuid4()}", headers=tenant_headers)

        assert response.status_code == 404


class TestAccountUsers:
    """Tests for /api/accounts/{account_id}/users"""

    def test_tenant_user_grants_account_access(self, client, tenant_headers, account):
        new_user = uuid4()

        response = client.post(
            f"/api/accounts/{account.id}/users",
            headers=tenant_headers,
            json={"user_id": str(new_user)},
        )

        assert response.status_code == 201
        assert response.json()["account_id"] == str(account.id)
        assert client.get(f"/api/accounts/{account.id}", headers=headers_for(new_user)).status_code == 200

    def test_grant_does_not_reach_tenant(self, client, tenant_headers, account, tenant):
        new_user = uuid4()
        client.post(
            f"/api/accounts/{account.id}/users",
            headers=tenant_headers,
            json={"user_id": str(new_user)},
        )

        response = client.get(f"/api/tenants/{tenant.id}", headers=headers_for(new_user))

        assert response.status_code == 403

    def test_account_user_cannot_grant(self, client, account_headers, account):
        response = client.post(
            f"/api/accounts/{account.id}/users",
            headers=account_headers,
            json={"user_id": str(uuid4())},
        )

        assert response.status_code == 403

    def test_list(self, client, tenant_headers, account, account_user_id):
        response = client.get(f"/api/accounts/{account.id}/users", headers=tenant_headers)

        assert response.status_code == 200
        assert [m["user_id"] for m in response.json()] == [str(account_user_id)]

    def test_revoke(self, client, tenant_headers, account, account_user_id):
        response = client.delete(
            f"/api/accounts/{account.id}/users/{account_user_id}", headers=tenant_headers
        )

        assert response.status_code == 204
        get_response = client.get(f"/api/accounts/{account.id}", headers=headers_for(account_user_id))
        assert get_response.status_code == 403

    def test_invalid_user_id(self, client, tenant_headers, account):
        response = client.post(
            f"/api/accounts/{account.id}/users", headers=tenant_headers, json={"user_id": "bob"}
        )

        assert response.status_code == 422
