"""
Integration tests for QuoteBox.

Test the assembled application through FastAPI TestClient:
- Full lifespan (in-memory SQLite database, schema created at startup)
- OpenRouter stubbed with httpx.MockTransport
- Metrics exposition and frontend routes
"""
