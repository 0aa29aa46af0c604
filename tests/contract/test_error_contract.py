"""Contract tests for error payloads and camelCase wire fields."""

import pytest


@pytest.mark.parametrize(
    "payload,message",
    [
        ({"accessType": "Read", "reason": "x"}, "Software ID is required"),
        ({"softwareId": "sw", "accessType": "Read"}, "Reason is required"),
        ({"softwareId": "sw", "accessType": "Read", "reason": "   "}, "Reason is required"),
        ({"softwareId": "sw", "accessType": "Owner", "reason": "x"}, "Invalid access type"),
    ],
)
async def test_request_validation_errors(client, employee, auth_headers, payload, message):
    response = await client.post(
        "/api/software/requests", json=payload, headers=auth_headers(employee)
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "validation_error"
    assert message in body["message"]


async def test_created_request_uses_camel_case(client, employee, jira, auth_headers):
    response = await client.post(
        "/api/software/requests",
        json={"softwareId": jira.id, "accessType": "Read", "reason": "x"},
        headers=auth_headers(employee),
    )

    request = response.json()["request"]
    assert set(request) == {"id", "userId", "softwareId", "accessType", "reason", "status"}


async def test_snake_case_payload_accepted(client, employee, jira, auth_headers):
    response = await client.post(
        "/api/software/requests",
        json={"software_id": jira.id, "access_type": "Read", "reason": "x"},
        headers=auth_headers(employee),
    )
    assert response.status_code == 201


async def test_software_payload_shape(client):
    response = await client.post(
        "/api/software/create-software",
        json={"name": "Grafana", "accessLevels": ["Read"]},
    )

    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Software created successfully"
    assert set(body["data"]) == {"id", "name", "description", "accessLevels"}
    assert body["data"]["accessLevels"] == ["Read"]


async def test_malformed_access_levels(client):
    response = await client.post(
        "/api/software/create-software", json={"name": "Grafana", "accessLevels": "Read"}
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Access levels must be an array"


async def test_missing_status_reported(client, employee, manager, jira, make_request, auth_headers):
    request = await make_request(employee, jira)

    response = await client.patch(
        f"/api/software/requests/{request.id}", json={}, headers=auth_headers(manager)
    )
    assert response.status_code == 400
    assert response.json()["message"].startswith("Valid status is required")


async def test_wrongly_typed_software_name(client):
    response = await client.post("/api/software/create-software", json={"name": 5})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "validation_error"
    assert "name" in body["message"]
    assert "detail" not in body


async def test_wrongly_typed_reason(client, employee, jira, auth_headers):
    response = await client.post(
        "/api/software/requests",
        json={"softwareId": jira.id, "accessType": "Read", "reason": ["x"]},
        headers=auth_headers(employee),
    )

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "validation_error"
    assert "reason" in body["message"]


async def test_non_json_body(client):
    response = await client.post(
        "/api/software/create-software",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"
