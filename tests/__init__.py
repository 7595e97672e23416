# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Theoria API:
# - test_models.py: Schema validation and record mapping
# - test_collection_service.py: Ordered CRUD + reorder against a fake database
# - test_api.py: Endpoint behaviour through FastAPI's TestClient
# - test_reorder_state.py / test_admin_client.py: Optimistic admin reordering
#
# Run tests with: poetry run pytest
# =============================================================================
