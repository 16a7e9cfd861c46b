"""
Unit tests for QuoteBox.

Test individual components in isolation:
- Tag catalog (classification, normalization bounds)
- Prompt builder (templates, request parameters)
- OpenRouter client (against httpx.MockTransport)
- Retry policy (attempt bound, retryable classification)
- Repository and database URL resolution (in-memory SQLite)
- Quote routes (mocked client and repository)
"""
