# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Carteira Católica API:
# - test_slugs.py, test_embeds.py, test_theme.py, test_utils.py: lib/ units
# - test_debounce.py: Debounced slug-check scheduling
# - test_*_service.py: Services against the in-memory Supabase (fakes.py)
# - test_api.py: Routers and the slug-check WebSocket via TestClient
#
# Run tests with: pytest
# =============================================================================
