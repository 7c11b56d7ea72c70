import pytest

from dealership.core.exceptions import ImageHostError
from dealership.models import VehicleImage
from dealership.services import image_host

PNG = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8BQDwAEhQGAhKmMIQAAAABJRU5ErkJggg=="


@pytest.fixture()
def host_calls(monkeypatch):
    """Replace the Cloudinary calls with recorders."""
    calls = {"uploaded": [], "deleted": []}

    def fake_upload(data_uri, folder):
        calls["uploaded"].append((data_uri, folder))
        n = len(calls["uploaded"])
        return {
            "url": f"https://res.cloudinary.com/demo/image/upload/v1/{folder}/img{n}.jpg",
            "public_id": f"{folder}/img{n}",
            "width": 1200,
            "height": 900,
        }

    def fake_delete(public_id):
        calls["deleted"].append(public_id)
        return {"result": "ok"}

    monkeypatch.setattr(image_host, "upload_image", fake_upload)
    monkeypatch.setattr(image_host, "delete_image", fake_delete)
    return calls


def test_upload_returns_host_urls_and_identifiers(client, auth_headers, host_calls):
    response = client.post("/api/upload", json={"images": [PNG, PNG]}, headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["count"] == 2
    assert body["images"][0]["publicId"] == "automotora/vehiculos/img1"
    assert body["images"][0]["url"].startswith("https://res.cloudinary.com/")
    assert body["images"][0]["width"] == 1200
    assert len(host_calls["uploaded"]) == 2


def test_upload_requires_token(client, host_calls):
    assert client.post("/api/upload", json={"images": [PNG]}).status_code == 401
    assert host_calls["uploaded"] == []


@pytest.mark.parametrize(
    "images",
    [None, [], [PNG] * 11, [PNG, "https://example.com/photo.jpg"], ["data:text/plain;base64,aGVsbG8="]],
)
def test_upload_rejects_bad_batches(client, auth_headers, host_calls, images):
    response = client.post("/api/upload", json={"images": images}, headers=auth_headers)

    assert response.status_code == 400
    assert host_calls["uploaded"] == []


def test_one_failed_upload_fails_the_batch(client, auth_headers, monkeypatch):
    def flaky_upload(data_uri, folder):
        if data_uri.endswith("broken"):
            raise ImageHostError("Error uploading image")
        return {"url": "https://res.cloudinary.com/x.jpg", "public_id": "x", "width": 1, "height": 1}

    monkeypatch.setattr(image_host, "upload_image", flaky_upload)

    response = client.post(
        "/api/upload",
        json={"images": [PNG, "data:image/png;base64,broken"]},
        headers=auth_headers,
    )

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Error uploading image"}


def test_associate_keeps_caller_order(client, auth_headers, make_vehicle):
    vehicle = make_vehicle()

    response = client.post(
        f"/api/vehiculos/{vehicle.id}/imagenes",
        json={"imagenes": [
            {"url": "https://img.example.com/a.jpg", "orden": 5, "publicId": "autos/a"},
            {"url": "https://img.example.com/b.jpg", "orden": 2},
            {"url": "https://img.example.com/c.jpg"},
        ]},
        headers=auth_headers,
    )

    assert response.status_code == 201
    created = response.json()["imagenes"]
    assert [img["orden"] for img in created] == [5, 2, 2]
    assert created[0]["publicId"] == "autos/a"
    assert created[1]["publicId"] is None
    assert all(img["vehiculoId"] == vehicle.id for img in created)


def test_associate_to_missing_vehicle_is_not_found(client, auth_headers):
    response = client.post(
        "/api/vehiculos/999/imagenes",
        json={"imagenes": [{"url": "https://img.example.com/a.jpg", "orden": 0}]},
        headers=auth_headers,
    )

    assert response.status_code == 404


def test_associate_requires_image_list(client, auth_headers, make_vehicle):
    vehicle = make_vehicle()

    response = client.post(f"/api/vehiculos/{vehicle.id}/imagenes", json={}, headers=auth_headers)

    assert response.status_code == 400


def test_last_image_cannot_be_removed(client, auth_headers, make_vehicle, db_session, host_calls):
    vehicle = make_vehicle(images=1)
    image_id = vehicle.images[0].id

    response = client.delete(f"/api/vehiculos/{vehicle.id}/imagenes/{image_id}", headers=auth_headers)

    assert response.status_code == 409
    db_session.expire_all()
    assert db_session.get(VehicleImage, image_id) is not None
    assert host_calls["deleted"] == []


def test_remove_image_deletes_hosted_file_by_stored_identifier(client, auth_headers, make_vehicle, db_session, host_calls):
    vehicle = make_vehicle(images=2)
    image = vehicle.images[1]
    image_id, public_id = image.id, image.public_id

    response = client.delete(f"/api/vehiculos/{vehicle.id}/imagenes/{image_id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["imagenesRestantes"] == 1
    assert response.json()["mensaje"] == "Image deleted successfully"
    assert host_calls["deleted"] == [public_id]
    db_session.expire_all()
    assert db_session.get(VehicleImage, image_id) is None


def test_host_failure_does_not_block_local_removal(client, auth_headers, make_vehicle, db_session, monkeypatch):
    def failing_delete(public_id):
        raise ImageHostError("Error deleting image")

    monkeypatch.setattr(image_host, "delete_image", failing_delete)
    vehicle = make_vehicle(images=2)
    image_id = vehicle.images[0].id

    response = client.delete(f"/api/vehiculos/{vehicle.id}/imagenes/{image_id}", headers=auth_headers)

    assert response.status_code == 200
    db_session.expire_all()
    assert db_session.get(VehicleImage, image_id) is None


def test_image_without_identifier_skips_host(client, auth_headers, make_vehicle, db_session, host_calls):
    vehicle = make_vehicle(images=1)
    extra = VehicleImage(vehicle_id=vehicle.id, url="https://images.example.com/stock.jpg", order=1)
    db_session.add(extra)
    db_session.commit()

    response = client.delete(f"/api/vehiculos/{vehicle.id}/imagenes/{extra.id}", headers=auth_headers)

    assert response.status_code == 200
    assert host_calls["deleted"] == []


def test_image_of_another_vehicle_is_rejected(client, auth_headers, make_vehicle):
    first = make_vehicle(images=2)
    second = make_vehicle(images=2)

    response = client.delete(
        f"/api/vehiculos/{second.id}/imagenes/{first.images[0].id}",
        headers=auth_headers,
    )

    assert response.status_code == 400


@pytest.mark.parametrize("path", ["/api/vehiculos/999/imagenes/1", "/api/vehiculos/{vehicle}/imagenes/999"])
def test_remove_unknown_vehicle_or_image_is_not_found(client, auth_headers, make_vehicle, path):
    vehicle = make_vehicle(images=2)

    response = client.delete(path.format(vehicle=vehicle.id), headers=auth_headers)

    assert response.status_code == 404
