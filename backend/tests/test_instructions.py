"""Tests for the AI customization API."""

import pytest


class TestAiInstructions:
    """Tests for GET/PUT /api/ai-instructions."""

    @pytest.mark.asyncio
    async def test_get_without_instructions(self, client, profiles, doctor_headers):
        response = await client.get("/api/ai-instructions", headers=doctor_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "No AI instructions configured"

    @pytest.mark.asyncio
    async def test_put_creates(self, client, profiles, doctor_headers):
        response = await client.put(
            "/api/ai-instructions",
            json={"instruction_text": "Be warm.", "prompt_text": "Q: parking? A: Level 2."},
            headers=doctor_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["doctor_id"] == "doctor-1"
        assert data["instruction_text"] == "Be warm."

        fetched = (await client.get("/api/ai-instructions", headers=doctor_headers)).json()
        assert fetched["prompt_text"] == "Q: parking? A: Level 2."

    @pytest.mark.asyncio
    async def test_put_replaces(self, client, doctor_instruction, doctor_headers):
        response = await client.put(
            "/api/ai-instructions",
            json={"instruction_text": "New persona."},
            headers=doctor_headers,
        )

        assert response.status_code == 200
        assert response.json()["instruction_text"] == "New persona."
        assert response.json()["prompt_text"] is None

    @pytest.mark.asyncio
    async def test_instructions_are_per_doctor(self, client, doctor_instruction, other_doctor_headers):
        response = await client.get("/api/ai-instructions", headers=other_doctor_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_empty_instruction_text_rejected(self, client, profiles, doctor_headers):
        response = await client.put(
            "/api/ai-instructions",
            json={"instruction_text": ""},
            headers=doctor_headers,
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_patient_forbidden(self, client, profiles, patient_headers):
        response = await client.get("/api/ai-instructions", headers=patient_headers)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_saved_instructions_reach_chat(
        self, client, linked_record, doctor_headers, patient_headers, reply_generator
    ):
        await client.put(
            "/api/ai-instructions",
            json={"instruction_text": "You answer only about Dr. Quinn's clinic."},
            headers=doctor_headers,
        )

        await client.post("/api/chat", json={"message": "Hi"}, headers=patient_headers)

        system_instructions, _ = reply_generator.calls[0]
        assert system_instructions.startswith("You answer only about Dr. Quinn's clinic.")
