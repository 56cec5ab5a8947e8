from datetime import date, datetime, UTC
from uuid import uuid4

from app.models.account_user import AccountUser
from app.models.bill import Bill
from app.models.tenant_user import TenantUser
from app.services.bill_generator import BillGenerator
from tests.conftest import SEED_USER_ID, headers_for


class TestListBills:
    """Tests for GET /api/bills"""

    def test_list_bills_newest_first(self, client, account_headers, account, make_schedule, make_bill):
        schedule = make_schedule()
        make_bill(schedule, date(2024, 1, 5))
        make_bill(schedule, date(2024, 2, 5))
        make_bill(schedule, date(2024, 3, 5))

        response = client.get(f"/api/bills?account_id={account.id}", headers=account_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["limit"] == 100
        assert data["offset"] == 0
        assert [b["due_date"] for b in data["bills"]] == ["2024-03-05", "2024-02-05", "2024-01-05"]
        assert data["bills"][0]["amount"] == "42.50"
        assert data["bills"][0]["bill_schedule_id"] == str(schedule.id)

    def test_filter_by_due_date_range(self, client, account_headers, account, make_schedule, make_bill):
        schedule = make_schedule()
        make_bill(schedule, date(2024, 1, 5))
        make_bill(schedule, date(2024, 2, 5))
        make_bill(schedule, date(2024, 3, 5))

        response = client.get(
            f"/api/bills?account_id={account.id}&start_date=2024-02-01&end_date=2024-03-05",
            headers=account_headers,
        )

        data = response.json()
        assert data["total"] == 2
        assert {b["due_date"] for b in data["bills"]} == {"2024-02-05", "2024-03-05"}

    def test_pagination(self, client, account_headers, account, make_schedule, make_bill):
        schedule = make_schedule()
        for month in range(1, 6):
            make_bill(schedule, date(2024, month, 5))

        response = client.get(
            f"/api/bills?account_id={account.id}&limit=2&offset=2", headers=account_headers
        )

        data = response.json()
        assert data["total"] == 5
        assert [b["due_date"] for b in data["bills"]] == ["2024-03-05", "2024-02-05"]

    def test_tenant_user_lists_any_account_of_tenant(
        self, client, tenant_headers, sibling_account
    ):
        response = client.get(f"/api/bills?account_id={sibling_account.id}", headers=tenant_headers)

        assert response.status_code == 200
        assert response.json()["bills"] == []

    def test_outsider_forbidden(self, client, outsider_headers, account):
        response = client.get(f"/api/bills?account_id={account.id}", headers=outsider_headers)

        assert response.status_code == 403

    def test_account_id_required(self, client, app_headers):
        response = client.get("/api/bills", headers=app_headers)

        assert response.status_code == 422


class TestGetBill:
    """Tests for GET /api/bills/{bill_id}"""

    def test_get_bill(self, client, account_headers, make_schedule, make_bill):
        bill = make_bill(make_schedule(), date(2024, 3, 5))

        response = client.get(f"/api/bills/{bill.id}", headers=account_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == str(bill.id)
        assert data["due_date"] == "2024-03-05"
        assert data["payment_id"] is None

    def test_sibling_account_user_forbidden(
        self, client, db_session, sibling_account, make_schedule, make_bill
    ):
        other_user = uuid4()
        db_session.add(
            AccountUser(user_id=other_user, account_id=sibling_account.id, created_user=SEED_USER_ID)
        )
        db_session.commit()
        bill = make_bill(make_schedule(), date(2024, 3, 5))

        response = client.get(f"/api/bills/{bill.id}", headers=headers_for(other_user))

        assert response.status_code == 403

    def test_unknown_bill(self, client, app_headers):
        response = client.get(f"/api/bills/{uuid4()}", headers=app_headers)

        assert response.status_code == 404

    def test_unknown_bill_forbidden_for_non_application_user(self, client, tenant_headers):
        response = client.get(f"/api/bills/{uuid4()}", headers=tenant_headers)

        assert response.status_code == 403


class TestUpdateBill:
    """Tests for PATCH /api/bills/{bill_id}"""

    def test_record_payment(self, client, tenant_headers, make_schedule, make_bill, tenant_user_id):
        bill = make_bill(make_schedule(), date(2024, 3, 5))

        response = client.patch(
            f"/api/bills/{bill.id}", headers=tenant_headers, json={"payment_id": "PAY-7781"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["payment_id"] == "PAY-7781"
        assert data["amount"] == "42.50"  # Unchanged
        assert data["updated_timestamp"] is not None
        assert bill.updated_user == tenant_user_id

    def test_correct_amount_and_due_date(self, client, tenant_headers, make_schedule, make_bill):
        bill = make_bill(make_schedule(), date(2024, 3, 5))

        response = client.patch(
            f"/api/bills/{bill.id}",
            headers=tenant_headers,
            json={"amount": "40.00", "due_date": "2024-03-08", "name": "Water (corrected)"},
        )

        data = response.json()
        assert data["amount"] == "40.00"
        assert data["due_date"] == "2024-03-08"
        assert data["name"] == "Water (corrected)"
        assert data["bill_schedule_id"] == str(bill.bill_schedule_id)

    def test_due_date_collision_rejected(self, client, tenant_headers, make_schedule, make_bill):
        schedule = make_schedule()
        make_bill(schedule, date(2024, 3, 5))
        april = make_bill(schedule, date(2024, 4, 5))

        response = client.patch(
            f"/api/bills/{april.id}", headers=tenant_headers, json={"due_date": "2024-03-05"}
        )

        assert response.status_code == 400

    def test_invalid_currency_rejected(self, client, tenant_headers, make_schedule, make_bill):
        bill = make_bill(make_schedule(), date(2024, 3, 5))

        response = client.patch(
            f"/api/bills/{bill.id}", headers=tenant_headers, json={"currency": "dollars"}
        )

        assert response.status_code == 422

    def test_account_user_cannot_update(self, client, account_headers, make_schedule, make_bill):
        """Account members can read their bills but not change them"""
        bill = make_bill(make_schedule(), date(2024, 3, 5))

        response = client.patch(
            f"/api/bills/{bill.id}", headers=account_headers, json={"amount": "0.00"}
        )

        assert response.status_code == 403

    def test_other_tenant_cannot_update(
        self, client, db_session, other_tenant, make_schedule, make_bill
    ):
        other_user = uuid4()
        db_session.add(
            TenantUser(user_id=other_user, tenant_id=other_tenant.id, created_user=SEED_USER_ID)
        )
        db_session.commit()
        bill = make_bill(make_schedule(), date(2024, 3, 5))

        response = client.patch(
            f"/api/bills/{bill.id}", headers=headers_for(other_user), json={"name": "Mine"}
        )

        assert response.status_code == 403


class TestDeleteBill:
    """Tests for DELETE /api/bills/{bill_id}"""

    def test_void_bill(self, client, tenant_headers, app_headers, account, make_schedule, make_bill):
        bill = make_bill(make_schedule(), date(2024, 3, 5))

        response = client.delete(f"/api/bills/{bill.id}", headers=tenant_headers)

        assert response.status_code == 204
        assert bill.disabled is True
        assert bill.disabled_timestamp is not None
        assert client.get(f"/api/bills/{bill.id}", headers=app_headers).status_code == 404

        listing = client.get(f"/api/bills?account_id={account.id}", headers=tenant_headers)
        assert listing.json()["total"] == 0

    def test_voided_bill_not_regenerated(
        self, db_session, client, tenant_headers, make_schedule, make_bill
    ):
        schedule = make_schedule(day_due=5)
        bill = make_bill(schedule, date(2024, 3, 5))
        client.delete(f"/api/bills/{bill.id}", headers=tenant_headers)

        generator = BillGenerator(db_session, system_user_id=SEED_USER_ID)

        assert generator.generate_due_bills(datetime(2024, 3, 1, tzinfo=UTC)) == 0

    def test_account_user_cannot_delete(self, client, account_headers, make_schedule, make_bill):
        bill = make_bill(make_schedule(), date(2024, 3, 5))

        response = client.delete(f"/api/bills/{bill.id}", headers=account_headers)

        assert response.status_code == 403
        assert bill.disabled is False


class TestRunGeneration:
    """Tests for POST /api/bill-generation/run"""

    def test_application_user_runs_generation(
        self, client, db_session, app_headers, account, make_schedule
    ):
        make_schedule(name="Water")
        make_schedule(name="Trash", day_due=28)

        response = client.post("/api/bill-generation/run", headers=app_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["bills_created"] == 2
        assert date.fromisoformat(data["run_date"])
        assert db_session.query(Bill).filter(Bill.account_id == account.id).count() == 2

    def test_second_run_creates_nothing(self, client, app_headers, make_schedule):
        make_schedule()

        first = client.post("/api/bill-generation/run", headers=app_headers)
        second = client.post("/api/bill-generation/run", headers=app_headers)

        assert first.json()["bills_created"] == 1
        assert second.json()["bills_created"] == 0

    def test_tenant_user_forbidden(self, client, db_session, tenant_headers, make_schedule):
        make_schedule()

        response = client.post("/api/bill-generation/run", headers=tenant_headers)

        assert response.status_code == 403
        assert db_session.query(Bill).count() == 0
