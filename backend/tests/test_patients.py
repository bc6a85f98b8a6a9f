"""Tests for the doctor-facing patient record API."""

import pytest

PATIENT_UID = "patient-1"

NEW_PATIENT = {
    "first_name": "Sam",
    "last_name": "Rivera",
    "id_number": "P002",
    "date_of_birth": "1988-04-12",
    "patient_specific_prompts": "Patient is hard of hearing; be concise.",
}


class TestPatientRecordCrud:
    """Create, read, update, delete."""

    @pytest.mark.asyncio
    async def test_create_patient(self, client, profiles, doctor_headers):
        response = await client.post("/api/patients", json=NEW_PATIENT, headers=doctor_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["doctor_id"] == "doctor-1"
        assert data["linked_auth_uid"] is None
        assert data["patient_specific_prompts"] == NEW_PATIENT["patient_specific_prompts"]

    @pytest.mark.asyncio
    async def test_create_rejects_bad_date(self, client, profiles, doctor_headers):
        payload = {**NEW_PATIENT, "date_of_birth": "12/04/1988"}

        response = await client.post("/api/patients", json=payload, headers=doctor_headers)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_patient_cannot_manage_records(self, client, profiles, patient_headers):
        response = await client.post("/api/patients", json=NEW_PATIENT, headers=patient_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Doctor access required"

    @pytest.mark.asyncio
    async def test_list_is_scoped_to_doctor(self, client, linked_record, doctor_headers, other_doctor_headers):
        await client.post("/api/patients", json=NEW_PATIENT, headers=other_doctor_headers)

        mine = (await client.get("/api/patients", headers=doctor_headers)).json()
        theirs = (await client.get("/api/patients", headers=other_doctor_headers)).json()

        assert mine["total"] == 1
        assert mine["items"][0]["id"] == linked_record.id
        assert theirs["total"] == 1
        assert theirs["items"][0]["id_number"] == "P002"

    @pytest.mark.asyncio
    async def test_list_pagination(self, client, profiles, doctor_headers):
        for i in range(3):
            await client.post(
                "/api/patients",
                json={**NEW_PATIENT, "id_number": f"P10{i}"},
                headers=doctor_headers,
            )

        data = (await client.get("/api/patients?skip=1&limit=1", headers=doctor_headers)).json()

        assert data["total"] == 3
        assert data["skip"] == 1
        assert data["limit"] == 1
        assert len(data["items"]) == 1

    @pytest.mark.asyncio
    async def test_other_doctor_gets_404(self, client, linked_record, other_doctor_headers):
        response = await client.get(f"/api/patients/{linked_record.id}", headers=other_doctor_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Patient not found"

    @pytest.mark.asyncio
    async def test_update_patient_prompts(self, client, linked_record, doctor_headers):
        response = await client.patch(
            f"/api/patients/{linked_record.id}",
            json={"patient_specific_prompts": "Use simple words."},
            headers=doctor_headers,
        )

        assert response.status_code == 200
        assert response.json()["patient_specific_prompts"] == "Use simple words."
        assert response.json()["first_name"] == "Pat"

    @pytest.mark.asyncio
    async def test_delete_patient(self, client, linked_record, doctor_headers):
        response = await client.delete(f"/api/patients/{linked_record.id}", headers=doctor_headers)
        assert response.status_code == 204

        response = await client.get(f"/api/patients/{linked_record.id}", headers=doctor_headers)
        assert response.status_code == 404


class TestPatientLinking:
    """Tests for POST /api/patients/{id}/link."""

    @pytest.mark.asyncio
    async def test_link_record(self, client, profiles, doctor_headers):
        created = (await client.post("/api/patients", json=NEW_PATIENT, headers=doctor_headers)).json()

        response = await client.post(
            f"/api/patients/{created['id']}/link",
            json={"auth_uid": "patient-7"},
            headers=doctor_headers,
        )

        assert response.status_code == 200
        assert response.json()["linked_auth_uid"] == "patient-7"

    @pytest.mark.asyncio
    async def test_link_conflict(self, client, linked_record, doctor_headers):
        created = (await client.post("/api/patients", json=NEW_PATIENT, headers=doctor_headers)).json()

        response = await client.post(
            f"/api/patients/{created['id']}/link",
            json={"auth_uid": PATIENT_UID},
            headers=doctor_headers,
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_linked_patient_chat_uses_record_prompts(
        self, client, profiles, doctor_headers, patient_headers, reply_generator
    ):
        """A record linked by the doctor drives the patient's assistant."""
        created = (await client.post("/api/patients", json=NEW_PATIENT, headers=doctor_headers)).json()
        await client.post(
            f"/api/patients/{created['id']}/link",
            json={"auth_uid": PATIENT_UID},
            headers=doctor_headers,
        )

        await client.post("/api/chat", json={"message": "Hi"}, headers=patient_headers)

        system_instructions, _ = reply_generator.calls[0]
        assert system_instructions.endswith(NEW_PATIENT["patient_specific_prompts"])
