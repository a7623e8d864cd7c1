"""
Persistence sync — write the filter state back into the query string.

An unnamed session's filters are not worth sharing, so nothing is written
until a username is set.
"""

import logging

from shelfsort.filtering.query_params import ParamStore
from shelfsort.filtering.range_controls import RANGE_CONTROLS
from shelfsort.filtering.toggle_controls import (
    BOOLEAN_CONTROLS,
    ratings_mode_control,
    username_control,
)
from shelfsort.models.filter_state import FilterState

logger = logging.getLogger(__name__)


def sync_query_params(state: FilterState, store: ParamStore) -> bool:
    """
    Encode every control's value into `store`.

    Keys equal to their default are removed, keys of unrelated parameters
    are left alone.

    Returns:
        True if the store was written, False when the session has no username
    """
    if not state.has_session:
        return False

    username_control.set_query_param(store, state)
    for control in RANGE_CONTROLS:
        control.set_query_param(store, state)
    ratings_mode_control.set_query_param(store, state)
    for boolean_control in BOOLEAN_CONTROLS:
        boolean_control.sync(store, state)

    logger.debug("query_params_synced", extra={"username": state.username})
    return True
