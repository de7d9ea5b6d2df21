from __future__ import annotations

DOCUMENT_RELPATH = "docs/redoc/master/openapi.json"
GENERATOR_RELPATH = "tools/generate_openapi_models.sh"
SNAPSHOT_MARKER = ".diff."

# Bump only after READ_ONLY_POST_PATTERNS and READ_ONLY_RPC_PATHS have been reviewed.
EXPECTED_NUMBER_OF_APIS = 51

REST_DOCS_URL = "https://github.com/qdrant/qdrant/blob/master/docs/DEVELOPMENT.md#rest"
READ_ONLY_IDENTIFIERS = ("READ_ONLY_POST_PATTERNS", "READ_ONLY_RPC_PATHS")
