"""
HTTP-level tests for /api/applications using FastAPI's TestClient.
Each test builds its own app around a fresh store (memory, SQLite, or one that is down).
"""
import unittest

from fastapi.testclient import TestClient

from database import make_engine
from main import create_app
from services.errors import StoreUnavailable
from stores import ApplicationStore, MemoryApplicationStore, SqlApplicationStore

ALICE = {
    "applicantName": "Alice",
    "email": "a@x.com",
    "loanAmount": 5000,
    "loanPurpose": "car",
}


class DownStore(ApplicationStore):
    async def _fail(self, *args, **kwargs):
        raise StoreUnavailable() from ConnectionError("connection refused to db.internal:5432")

    insert = _fail
    find_all = _fail
    find_by_id = _fail
    update_by_id = _fail


class RecordingSqlStore(SqlApplicationStore):
    """SQLite store that remembers the lifecycle hooks the app ran."""

    def __init__(self):
        super().__init__(make_engine("sqlite+aiosqlite:///:memory:"))
        self.events = []

    async def startup(self):
        self.events.append("startup")
        await super().startup()

    async def shutdown(self):
        self.events.append("shutdown")
        await super().shutdown()


class TestApplicationsApi(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(create_app(store=MemoryApplicationStore()))

    def _create(self, **overrides):
        r = self.client.post("/api/applications", json={**ALICE, **overrides})
        self.assertEqual(r.status_code, 201)
        return r.json()

    def test_end_to_end_approval(self):
        r = self.client.post("/api/applications", json=ALICE)
        self.assertEqual(r.status_code, 201)
        created = r.json()
        self.assertEqual(created["status"], "Pending")
        self.assertTrue(created["id"])

        r = self.client.put(f"/api/applications/{created['id']}", json={"status": "Approved"})
        self.assertEqual(r.status_code, 200)
        body = r.json()
        self.assertEqual(body["message"], "Application status updated.")
        self.assertEqual(body["application"]["status"], "Approved")

        r = self.client.get(f"/api/applications/{created['id']}")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["status"], "Approved")

    def test_create_response_shape(self):
        created = self._create(status="Approved")
        self.assertEqual(
            set(created),
            {"id", "applicantName", "email", "loanAmount", "loanPurpose", "status", "submittedAt"},
        )
        self.assertEqual(created["applicantName"], "Alice")
        self.assertEqual(created["loanAmount"], 5000)
        self.assertEqual(created["status"], "Pending")
        self.assertIsInstance(created["submittedAt"], str)

    def test_create_missing_field(self):
        payload = dict(ALICE)
        del payload["email"]
        r = self.client.post("/api/applications", json=payload)
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json(), {"message": "Please provide all required fields."})

    def test_create_invalid_amount(self):
        for amount in (-100, "5000"):
            with self.subTest(amount=amount):
                r = self.client.post("/api/applications", json={**ALICE, "loanAmount": amount})
                self.assertEqual(r.status_code, 400)
                self.assertEqual(r.json(), {"message": "Loan amount must be a positive number."})

    def test_create_amount_beyond_float_range(self):
        r = self.client.post("/api/applications", json={**ALICE, "loanAmount": int("9" * 400)})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json(), {"message": "Loan amount must be a positive number."})
        self.assertEqual(self.client.get("/api/applications").json(), [])

    def test_create_empty_list_amount(self):
        r = self.client.post("/api/applications", json={**ALICE, "loanAmount": []})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json(), {"message": "Loan amount must be a positive number."})

    def test_integer_amount_round_trips(self):
        created = self._create(loanAmount=9007199254740993)
        self.assertEqual(created["loanAmount"], 9007199254740993)
        fetched = self.client.get(f"/api/applications/{created['id']}").json()
        self.assertEqual(fetched["loanAmount"], 9007199254740993)

    def test_create_without_body(self):
        r = self.client.post("/api/applications")
        self.assertEqual(r.status_code, 400)
        self.assertIn("message", r.json())

    def test_create_malformed_json(self):
        r = self.client.post(
            "/api/applications",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json(), {"message": "Request body must be valid JSON."})

    def test_list(self):
        self.assertEqual(self.client.get("/api/applications").json(), [])
        a = self._create(applicantName="A")
        b = self._create(applicantName="B")
        r = self.client.get("/api/applications")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), [a, b])

    def test_get_unknown(self):
        r = self.client.get("/api/applications/APP-does-not-exist")
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json(), {"message": "Application not found."})

    def test_update_invalid_status(self):
        created = self._create()
        for body in ({"status": "NotAStatus"}, {}, {"status": None}):
            with self.subTest(body=body):
                r = self.client.put(f"/api/applications/{created['id']}", json=body)
                self.assertEqual(r.status_code, 400)
                self.assertEqual(r.json(), {"message": "Status must be one of: Pending, Approved, Rejected."})
        self.assertEqual(self.client.get(f"/api/applications/{created['id']}").json(), created)

    def test_update_unknown(self):
        r = self.client.put("/api/applications/APP-does-not-exist", json={"status": "Approved"})
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json(), {"message": "Application not found."})

    def test_update_changes_only_status(self):
        created = self._create()
        r = self.client.put(f"/api/applications/{created['id']}", json={"status": "Rejected", "loanAmount": 1})
        updated = r.json()["application"]
        self.assertEqual(updated, {**created, "status": "Rejected"})

    def test_no_delete_operation(self):
        created = self._create()
        r = self.client.delete(f"/api/applications/{created['id']}")
        self.assertEqual(r.status_code, 405)
        self.assertIn("message", r.json())
        self.assertEqual(self.client.get(f"/api/applications/{created['id']}").status_code, 200)

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})


class TestApiStoreUnavailable(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(create_app(store=DownStore()))

    def test_store_fault_is_generic_500(self):
        for method, path, body in (
            ("post", "/api/applications", ALICE),
            ("get", "/api/applications", None),
            ("get", "/api/applications/APP-1", None),
            ("put", "/api/applications/APP-1", {"status": "Approved"}),
        ):
            with self.subTest(method=method, path=path):
                r = self.client.request(method.upper(), path, json=body)
                self.assertEqual(r.status_code, 500)
                self.assertEqual(r.json(), {"message": "Internal server error."})
                self.assertNotIn("db.internal", r.text)

    def test_store_fault_logged_once(self):
        with self.assertLogs(level="ERROR") as logs:
            r = self.client.get("/api/applications/APP-1")
        self.assertEqual(r.status_code, 500)
        self.assertEqual(len(logs.records), 1)
        self.assertEqual(logs.records[0].name, "services.registry")

    def test_validation_still_returns_400(self):
        r = self.client.post("/api/applications", json={})
        self.assertEqual(r.status_code, 400)


class TestSqlBackedApi(unittest.TestCase):
    def test_round_trip_through_lifespan(self):
        store = RecordingSqlStore()
        with TestClient(create_app(store=store)) as client:
            self.assertEqual(store.events, ["startup"])
            r = client.post("/api/applications", json=ALICE)
            self.assertEqual(r.status_code, 201)
            created = r.json()
            self.assertEqual(created["status"], "Pending")
            self.assertEqual(created["loanAmount"], 5000)

            r = client.put(f"/api/applications/{created['id']}", json={"status": "Approved"})
            self.assertEqual(r.status_code, 200)
            self.assertEqual(r.json()["application"], {**created, "status": "Approved"})

            r = client.get(f"/api/applications/{created['id']}")
            self.assertEqual(r.json(), {**created, "status": "Approved"})
            self.assertEqual(client.get("/api/applications").json(), [{**created, "status": "Approved"}])
            self.assertEqual(client.get("/api/applications/APP-does-not-exist").status_code, 404)
        self.assertEqual(store.events, ["startup", "shutdown"])


if __name__ == "__main__":
    unittest.main()
