"""
pytest suite for algokit-client.

Test categories:
- Unit tests: composer, services and node wrapper with a mocked algod client
- Edge case tests: empty/oversized groups, sparse signing, rejections, timeouts
"""
