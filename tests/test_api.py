import csv
import io

import pytest
from fastapi.testclient import TestClient

from orgdirectory.application import (
    build_directory_service,
    configure_directory_service,
    get_directory_service,
    reset_directory_state,
)
from orgdirectory.infrastructure import InMemoryStorageBackend


@pytest.fixture(autouse=True)
def reset_state():
    reset_directory_state()
    yield
    reset_directory_state()


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("ORGDIR_DATA_ROOT", str(tmp_path))
    configure_directory_service(build_directory_service(InMemoryStorageBackend()))
    from orgdirectory.app import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


def _create_employee(client, **fields):
    payload = {"name": "Ana Souza", "instructions": "Be formal and concise.", "department": "ContentCreation"}
    payload.update(fields)
    response = client.post("/api/employees", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


def test_directory_workflow(client):
    # 1. companies
    response = client.post("/api/companies", json={"name": "Acme", "logo_url": "https://example.com/acme.png"})
    assert response.status_code == 200
    acme = response.json()
    globex = client.post("/api/companies", json={"name": "Globex"}).json()

    items = client.get("/api/companies").json()["items"]
    assert {item["id"] for item in items} == {globex["id"], acme["id"]}
    assert client.get(f"/api/companies/{acme['id']}").json()["logo_url"] == "https://example.com/acme.png"

    # 2. employees
    ana = _create_employee(client, company_id=acme["id"])
    assert ana["status"] == "Active"

    # 3. select ana for content creation and scope to acme
    response = client.put("/api/departments/ContentCreation/active", json={"employee_id": ana["id"]})
    assert response.json()["selected_employee_id"] == ana["id"]
    client.put("/api/scope", json={"company_id": acme["id"]})

    effective = client.get("/api/departments/ContentCreation/effective").json()
    assert effective["employee"]["id"] == ana["id"]

    # 4. another company scope hides ana without touching the selection
    client.put("/api/scope", json={"company_id": globex["id"]})
    assert client.get("/api/departments/ContentCreation/effective").json()["employee"] is None
    overview = client.get("/api/departments").json()
    content = next(item for item in overview["departments"] if item["department"] == "ContentCreation")
    assert content["selected_employee_id"] == ana["id"]
    assert content["effective_employee"] is None

    # 5. deleting acme releases ana
    response = client.delete(f"/api/companies/{acme['id']}")
    assert response.status_code == 200
    assert client.get(f"/api/employees/{ana['id']}").json()["company_id"] is None
    assert client.get("/api/departments/ContentCreation/effective").json()["employee"]["id"] == ana["id"]

    # 6. leave heals the selection
    response = client.put(f"/api/employees/{ana['id']}/status", json={"status": "OnLeave"})
    assert response.json()["status"] == "OnLeave"
    assert client.get("/api/departments/ContentCreation/effective").json()["employee"] is None
    assert get_directory_service().assignments.get_raw("ContentCreation") is None


def test_scoped_listing_and_overview_param(client):
    acme = client.post("/api/companies", json={"name": "Acme"}).json()
    globex = client.post("/api/companies", json={"name": "Globex"}).json()
    ana = _create_employee(client, company_id=acme["id"])
    caio = _create_employee(client, name="Caio Reis")

    client.put("/api/scope", json={"company_id": globex["id"]})
    scoped = {item["id"] for item in client.get("/api/employees").json()["items"]}
    assert scoped == {caio["id"]}

    everything = {item["id"] for item in client.get("/api/employees", params={"scope": "overview"}).json()["items"]}
    assert everything == {ana["id"], caio["id"]}

    acme_view = client.get("/api/employees", params={"scope": acme["id"]}).json()["items"]
    assert {item["id"] for item in acme_view} == {ana["id"], caio["id"]}

    candidates = client.get("/api/departments/ContentCreation/candidates", params={"scope": acme["id"]}).json()
    assert {item["id"] for item in candidates["items"]} == {ana["id"], caio["id"]}


def test_update_employee_keeps_department(client):
    ana = _create_employee(client)
    response = client.put(
        f"/api/employees/{ana['id']}",
        json={"name": "Ana Maria", "instructions": "Be warm and brief.", "department": "Summarizer"},
    )
    assert response.status_code == 200
    assert response.json()["department"] == "ContentCreation"
    assert response.json()["name"] == "Ana Maria"


def test_company_api_config_endpoint(client):
    acme = client.post("/api/companies", json={"name": "Acme"}).json()
    client.put(f"/api/companies/{acme['id']}/api-configs/Instagram", json={"api_key": "k1"})
    response = client.put(f"/api/companies/{acme['id']}/api-configs/Instagram", json={"account_id": "a1"})
    assert response.json()["api_configs"]["Instagram"] == {"api_key": "k1", "account_id": "a1"}


def test_error_mapping(client):
    assert client.post("/api/companies", json={"name": "A"}).status_code == 422
    assert client.put("/api/companies/missing", json={"name": "Ghost"}).status_code == 404
    assert client.delete("/api/employees/missing").status_code == 404
    assert client.get("/api/companies/missing").status_code == 404

    response = client.post(
        "/api/employees",
        json={
            "name": "Ana Souza",
            "instructions": "Be formal and concise.",
            "department": "ContentCreation",
            "company_id": "missing",
        },
    )
    assert response.status_code == 409
    assert "missing" in response.json()["detail"]

    assert client.put("/api/departments/Accounting/active", json={"employee_id": "x"}).status_code == 422


def test_scope_endpoint_round_trip(client):
    assert client.get("/api/scope").json() == {"company_id": None, "overview": True}
    client.put("/api/scope", json={"company_id": "c-1"})
    assert client.get("/api/scope").json() == {"company_id": "c-1", "overview": False}
    client.put("/api/scope", json={"company_id": None})
    assert client.get("/api/scope").json()["overview"] is True


def test_scope_overview_keyword_selects_overview(client):
    acme = client.post("/api/companies", json={"name": "Acme"}).json()
    ana = _create_employee(client, company_id=acme["id"])

    response = client.put("/api/scope", json={"company_id": "overview"})

    assert response.json() == {"company_id": None, "overview": True}
    assert {item["id"] for item in client.get("/api/employees").json()["items"]} == {ana["id"]}


def test_export_roster_csv(client, tmp_path):
    acme = client.post("/api/companies", json={"name": "Acme"}).json()
    ana = _create_employee(client, company_id=acme["id"])
    _create_employee(client, name="Caio Reis")

    response = client.get("/api/employees/export")
    assert response.status_code == 200

    rows = list(csv.DictReader(io.StringIO(response.text)))
    assert len(rows) == 2
    ana_row = next(row for row in rows if row["id"] == ana["id"])
    assert ana_row["company_name"] == "Acme"
    assert ana_row["department_label"] == "Content creation"
    assert "roster.csv" in response.headers["content-disposition"]
    assert not (tmp_path / "exports").exists()
