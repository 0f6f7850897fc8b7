# API Utilities - DRY Helpers
from destaque_sheq.api.utils.db_helpers import get_by_id, validate_unique, commit_or_conflict
from destaque_sheq.api.utils.updates import update_entity

__all__ = [
    # db_helpers
    "get_by_id",
    "validate_unique",
    "commit_or_conflict",
    # updates
    "update_entity",
]
