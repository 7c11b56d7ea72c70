import pytest

from dealership.core.enums import InquiryStatus
from dealership.models import Inquiry

SUBMISSION = {
    "nombre": "  Ana Pérez ",
    "email": " Ana.Perez@Example.com ",
    "telefono": "1155551234",
    "mensaje": "  Is the car still available for a test drive?  ",
}


def test_public_submission_is_stored_as_pending(client, make_vehicle):
    vehicle = make_vehicle()

    response = client.post("/api/consultas", json=dict(SUBMISSION, vehiculoId=vehicle.id))

    assert response.status_code == 201
    inquiry = response.json()["consulta"]
    assert inquiry["estado"] == "PENDIENTE"
    assert inquiry["nombre"] == "Ana Pérez"
    assert inquiry["email"] == "ana.perez@example.com"
    assert inquiry["mensaje"] == "Is the car still available for a test drive?"
    assert inquiry["vehiculo"]["id"] == vehicle.id
    assert inquiry["vehiculo"]["precio"] == 15000


def test_submission_without_vehicle_is_allowed(client):
    response = client.post("/api/consultas", json=SUBMISSION)

    assert response.status_code == 201
    assert response.json()["consulta"]["vehiculoId"] is None


def test_short_message_is_rejected_and_not_stored(client, db_session):
    response = client.post("/api/consultas", json=dict(SUBMISSION, mensaje="   too short  "))

    assert response.status_code == 400
    assert "at least 10" in response.json()["error"]
    assert db_session.query(Inquiry).count() == 0


@pytest.mark.parametrize("email", ["not-an-email", "a@b", "with space@example.com", "@example.com"])
def test_invalid_email_is_rejected(client, email):
    response = client.post("/api/consultas", json=dict(SUBMISSION, email=email))

    assert response.status_code == 400


def test_missing_fields_are_reported_together(client):
    response = client.post("/api/consultas", json={})

    assert response.status_code == 400
    assert len(response.json()["errors"]) == 4


def test_unknown_vehicle_is_not_found_rather_than_invalid(client, db_session):
    response = client.post("/api/consultas", json=dict(SUBMISSION, vehiculoId=424242))

    assert response.status_code == 404
    assert db_session.query(Inquiry).count() == 0



def test_out_of_range_vehicle_id_is_rejected(client, db_session):
    response = client.post("/api/consultas", json=dict(SUBMISSION, vehiculoId=10 ** 19))

    assert response.status_code == 400
    assert db_session.query(Inquiry).count() == 0


def test_listing_requires_token(client):
    assert client.get("/api/consultas").status_code == 401


def test_listing_is_newest_first_with_vehicle_summary(client, auth_headers, make_vehicle, make_inquiry):
    vehicle = make_vehicle()
    older = make_inquiry(vehicle_id=vehicle.id)
    newer = make_inquiry()

    response = client.get("/api/consultas", headers=auth_headers)

    body = response.json()
    assert body["count"] == 2
    assert [i["id"] for i in body["consultas"]] == [newer.id, older.id]
    assert body["consultas"][1]["vehiculo"] == {
        "id": vehicle.id,
        "marca": "Toyota",
        "modelo": "Corolla",
        "anio": 2020,
        "precio": 15000,
    }
    assert body["consultas"][0]["vehiculo"] is None


def test_listing_filters_by_status_and_vehicle(client, auth_headers, make_vehicle, make_inquiry):
    vehicle = make_vehicle()
    match = make_inquiry(vehicle_id=vehicle.id, status=InquiryStatus.CONTACTED)
    make_inquiry(vehicle_id=vehicle.id)
    make_inquiry(status=InquiryStatus.CONTACTED)

    response = client.get(
        "/api/consultas",
        params={"estado": "CONTACTADO", "vehiculoId": vehicle.id},
        headers=auth_headers,
    )

    assert [i["id"] for i in response.json()["consultas"]] == [match.id]


def test_get_single_inquiry(client, auth_headers, make_inquiry):
    inquiry = make_inquiry()

    response = client.get(f"/api/consultas/{inquiry.id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["consulta"]["email"] == inquiry.email


def test_status_update(client, auth_headers, make_inquiry):
    inquiry = make_inquiry()

    response = client.put(f"/api/consultas/{inquiry.id}", json={"estado": "CONTACTADO"}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["consulta"]["estado"] == "CONTACTADO"


@pytest.mark.parametrize("body", [{"estado": "ARCHIVADO"}, {"estado": "pendiente"}, {}])
def test_invalid_status_update_keeps_stored_status(client, auth_headers, make_inquiry, db_session, body):
    inquiry = make_inquiry(status=InquiryStatus.CONTACTED)

    response = client.put(f"/api/consultas/{inquiry.id}", json=body, headers=auth_headers)

    assert response.status_code == 400
    db_session.expire_all()
    assert db_session.get(Inquiry, inquiry.id).status == InquiryStatus.CONTACTED


def test_status_update_of_missing_inquiry_is_not_found(client, auth_headers):
    response = client.put("/api/consultas/999", json={"estado": "CERRADO"}, headers=auth_headers)

    assert response.status_code == 404


def test_delete_inquiry(client, auth_headers, make_inquiry, db_session):
    inquiry = make_inquiry()

    response = client.delete(f"/api/consultas/{inquiry.id}", headers=auth_headers)

    assert response.status_code == 200
    db_session.expire_all()
    assert db_session.query(Inquiry).count() == 0
    assert client.delete(f"/api/consultas/{inquiry.id}", headers=auth_headers).status_code == 404
