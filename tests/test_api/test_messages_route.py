"""Tests for the message generation endpoint."""

from src.enrichment.errors import ConfigurationError
from src.messaging.errors import MessageGenerationError, NoTrendsSelectedError

VALID_BODY = {
    "businessName": "  Acme Cafe ",
    "businessType": "cafe",
    "tone": "casual",
    "selectedTrends": {
        "hashtags": [
            {"tag": "cricket", "engagement": 120, "platform": "reddit", "category": "General"},
        ],
        "themes": [{"name": "General", "weight": 0.12, "platforms": ["reddit"]}],
    },
}


class TestGenerateMessage:
    """Tests for POST /generate-message."""

    def test_success(self, client, mock_message_service):
        """Four messages are returned with camelCase keys."""
        response = client.post("/generate-message", json=VALID_BODY)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert "generatedAt" in data
        assert [m["platform"] for m in data["messages"]] == [
            "Twitter",
            "Instagram",
            "LinkedIn",
            "Facebook",
        ]
        assert data["messages"][0]["engagementPotential"] == 83
        assert data["messages"][0]["hashtags"] == ["cricket"]

    def test_service_inputs(self, client, mock_message_service):
        """The business profile is trimmed and trends are parsed."""
        client.post("/generate-message", json=VALID_BODY)

        business, selected = mock_message_service.generate.await_args.args
        assert business.name == "Acme Cafe"
        assert business.type == "cafe"
        assert business.tone == "casual"
        assert [h.tag for h in selected.hashtags] == ["cricket"]
        assert selected.themes[0].name == "General"

    def test_business_type_optional(self, client, mock_message_service):
        """A missing business type defaults to other."""
        body = {k: v for k, v in VALID_BODY.items() if k != "businessType"}

        response = client.post("/generate-message", json=body)

        assert response.status_code == 200
        business, _ = mock_message_service.generate.await_args.args
        assert business.type == "other"

    def test_missing_fields(self, client, mock_message_service):
        """Missing required fields list what is required."""
        response = client.post("/generate-message", json={"tone": "casual"})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Missing required fields"
        assert data["required"] == ["businessName", "tone", "selectedTrends"]
        mock_message_service.generate.assert_not_awaited()

    def test_blank_business_name(self, client):
        """Whitespace-only names count as missing."""
        response = client.post("/generate-message", json={**VALID_BODY, "businessName": "   "})

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"

    def test_no_trends_selected(self, client, mock_message_service):
        """An empty selection is a 400."""
        mock_message_service.generate.side_effect = NoTrendsSelectedError()

        response = client.post(
            "/generate-message",
            json={**VALID_BODY, "selectedTrends": {"hashtags": [], "themes": []}},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "No trends selected"

    def test_configuration_error(self, client, mock_message_service):
        """Missing AI configuration maps to 422 with details."""
        mock_message_service.generate.side_effect = ConfigurationError("GROQ_API_KEY is required")

        response = client.post("/generate-message", json=VALID_BODY)

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "AI service configuration error"
        assert data["message"] == "AI text generation service is not properly configured"
        assert data["details"] == "GROQ_API_KEY is required"

    def test_generation_failure(self, client, mock_message_service):
        """A failed LLM call maps to 500 with no partial messages."""
        mock_message_service.generate.side_effect = MessageGenerationError(
            "AI text generation failed for Instagram: 429", platform="Instagram"
        )

        response = client.post("/generate-message", json=VALID_BODY)

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "AI text generation failed"
        assert "messages" not in data

    def test_unexpected_failure(self, client, mock_message_service):
        """Unexpected errors map to a generic 500."""
        mock_message_service.generate.side_effect = RuntimeError("boom")

        response = client.post("/generate-message", json=VALID_BODY)

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to generate messages"

    def test_get_not_allowed(self, client):
        """Only POST is supported."""
        response = client.get("/generate-message")

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}
