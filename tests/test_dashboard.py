from dealership.core.enums import InquiryStatus, VehicleStatus


def test_dashboard_requires_token(client):
    assert client.get("/api/dashboard").status_code == 401


def test_dashboard_counts_by_status(client, auth_headers, make_vehicle, make_inquiry):
    make_vehicle()
    make_vehicle()
    make_vehicle(status=VehicleStatus.RESERVED)
    for _ in range(6):
        make_inquiry()
    make_inquiry(status=InquiryStatus.CLOSED)

    response = client.get("/api/dashboard", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["totalVehiculos"] == 3
    assert body["vehiculosPorEstado"] == {"DISPONIBLE": 2, "RESERVADO": 1, "VENDIDO": 0}
    assert body["totalConsultas"] == 7
    assert body["consultasPorEstado"] == {"PENDIENTE": 6, "CONTACTADO": 0, "CERRADO": 1}
    assert len(body["consultasRecientes"]) == 5
    assert body["consultasRecientes"][0]["estado"] == "CERRADO"
