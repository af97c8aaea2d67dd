from app.models.client import Client
from app.models.outcome import OUTCOME_MODELS


def _body(**overrides) -> dict:
    body = {
        "firstName": "Anna",
        "lastName": "Smith",
        "email": "anna@x.com",
        "phone": "1234567890",
        "educationId": "EDU001",
        "academicYear": "2024",
        "status": "RECRUITED",
        "title": "Developer",
        "company": "Acme",
        "position": "Backend",
        "startYear": "2024",
        "workCity": "Oslo",
    }
    body.update(overrides)
    return body


def _add(db_client, **overrides) -> dict:
    resp = db_client.post("/client/add", json=_body(**overrides))
    assert resp.status_code == 201, resp.text
    return resp.json()["client"]


def test_add_returns_camel_case_client_with_outcome(db_client):
    created = _add(db_client)
    assert created["firstName"] == "Anna"
    assert created["educationId"] == "EDU001"
    assert created["education"] == {"id": "EDU001", "name": "Software Development"}
    assert created["deletedAt"] is None
    assert created["outcome"] == {
        "status": "RECRUITED",
        "title": "Developer",
        "company": "Acme",
        "position": "Backend",
        "startYear": "2024",
        "workCity": "Oslo",
    }

    fetched = db_client.get(f"/client/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["outcome"] == created["outcome"]


def test_add_duplicate_email_is_conflict(db_client):
    _add(db_client)
    resp = db_client.post("/client/add", json=_body(firstName="Other"))
    assert resp.status_code == 409


def test_update_with_new_status_swaps_outcome(db_client, db_session):
    created = _add(db_client)
    body = _body(status="FARTHER", school="NTNU", furtherEd="MSc", city="Trondheim")
    resp = db_client.put(f"/client/{created['id']}", json=body)
    assert resp.status_code == 200, resp.text
    updated = resp.json()["client"]
    assert updated["status"] == "FARTHER"
    assert updated["outcome"] == {"status": "FARTHER", "school": "NTNU", "furtherEd": "MSc", "city": "Trondheim"}

    rows = []
    for model in OUTCOME_MODELS:
        rows.extend(db_session.query(model).filter(model.client_id == created["id"]).all())
    assert len(rows) == 1

    fetched = db_client.get(f"/client/{created['id']}").json()
    assert fetched["outcome"]["status"] == "FARTHER"


def test_update_unknown_client_is_not_found(db_client):
    resp = db_client.put("/client/does-not-exist", json=_body())
    assert resp.status_code == 404


def test_list_with_search_and_pagination(db_client):
    _add(db_client, firstName="Maria", lastName="Olsen", email="m@x.com")
    _add(db_client, firstName="Peter", lastName="Marsh", email="p@x.com")
    _add(db_client, firstName="Ola", lastName="Nordmann", email="ola@x.com")

    resp = db_client.get("/client", params={"search": "mar"})
    assert resp.status_code == 200
    body = resp.json()
    assert sorted(c["firstName"] for c in body["data"]) == ["Maria", "Peter"]
    assert body["pagination"] == {"currentPage": 1, "totalPages": 1, "totalItems": 2, "pageSize": 10}

    everyone = db_client.get("/client").json()
    assert [c["firstName"] for c in everyone["data"]] == ["Ola", "Peter", "Maria"]


def test_list_past_the_last_page_is_not_found(db_client):
    _add(db_client)
    assert db_client.get("/client", params={"page": "2"}).status_code == 404
    resp = db_client.get("/client", params={"page": "99999999999999999999"})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "No more results"


def test_delete_hides_client_but_keeps_row(db_client, db_session):
    created = _add(db_client)
    resp = db_client.delete(f"/client/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["client"]["deletedAt"] is not None

    assert db_client.get(f"/client/{created['id']}").status_code == 404
    assert db_client.delete(f"/client/{created['id']}").status_code == 404
    assert db_client.get("/client").status_code == 404
    assert db_session.query(Client).filter(Client.id == created["id"]).count() == 1


def test_stats_count_active_clients_per_education(db_client):
    _add(db_client, email="a1@x.com", educationId="EDU001")
    _add(db_client, email="b1@x.com", educationId="EDU002")
    removed = _add(db_client, email="c1@x.com", educationId="EDU003")
    db_client.delete(f"/client/{removed['id']}")

    resp = db_client.get("/client/stats")
    assert resp.status_code == 200
    body = resp.json()
    assert body["totalClients"] == 2
    by_name = {c["name"]: c for c in body["categories"]}
    assert by_name["Software Development"]["percentage"] == 50.0
    assert by_name["Data Science & AI"]["count"] == 1
    assert by_name["Creative Technologies"]["count"] == 0


def test_educations_route_is_not_taken_for_a_client_id(db_client):
    resp = db_client.get("/client/educations")
    assert resp.status_code == 200
    assert [e["name"] for e in resp.json()] == ["Creative Technologies", "Data Science & AI", "Software Development"]
