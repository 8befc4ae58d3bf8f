"""
In-memory view state for the feature request list.

The store owns the ordered list shown to the user and the set of ids this
device has voted for. Votes are applied optimistically and rolled back if
the server rejects them. Rollbacks are keyed by id and only touch an item
that still holds the optimistic value, so a refresh that lands in between
is never overwritten.

Mutating methods are meant to be called from one thread (the UI loop);
the store does not deduplicate concurrent toggles on the same id.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Set

from featurepulse.api.client import FeaturePulseAPI
from featurepulse.api.errors import AlreadyVotedError, FeaturePulseError, PaymentRequiredError
from featurepulse.logger import BasicLogger
from featurepulse.models.feature_request import FeatureRequest
from featurepulse.models.server_config import ServerConfigState
from featurepulse.models.user import User
from featurepulse.utils.seeded_shuffle import shuffle_with_seed
from featurepulse.validation import FeatureRequestDraft, FeatureRequestValidator


class FeatureRequestStore:
    def __init__(
        self,
        api: FeaturePulseAPI,
        user: User,
        server_config: ServerConfigState,
        validator: Optional[FeatureRequestValidator] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.api = api
        self.user = user
        self.server_config = server_config
        self.validator = validator or FeatureRequestValidator()
        self.logger = logger or BasicLogger("FeatureRequestStore").get_logger()

        self.feature_requests: List[FeatureRequest] = []
        self.voted_request_ids: Set[str] = set()
        self.is_loading: bool = False
        self.error: Optional[FeaturePulseError] = None
        self.previous_request_count: int = 0

        self.vote_error: Optional[FeaturePulseError] = None
        self.vote_error_message: Optional[str] = None

        self.is_submitting: bool = False
        self.submit_error: Optional[Exception] = None

    # ----------------------------------------------------------------------
    # Loading
    # ----------------------------------------------------------------------
    def load_feature_requests(self, is_refresh: bool = False) -> bool:
        """Fetch, shuffle per device, and replace the list.

        On failure the previous list is kept, ``error`` is set and ``False``
        is returned; ``error.retryable`` tells the caller whether a retry
        affordance makes sense.
        """
        # Spinner only on the initial load, not on pull-to-refresh
        if not is_refresh:
            self.is_loading = True
        self.error = None

        try:
            fetched = self.api.fetch_feature_requests()
        except FeaturePulseError as e:
            self.logger.warning("[FeatureRequestStore] Loading feature requests failed: %s", e)
            self.error = e
            self.is_loading = False
            return False

        shuffled = shuffle_with_seed(fetched, self.user.device_id)

        if self.feature_requests:
            self.previous_request_count = len(self.feature_requests)

        self.feature_requests = shuffled
        self.voted_request_ids = {request.id for request in shuffled if request.has_voted}
        self.is_loading = False
        return True

    # ----------------------------------------------------------------------
    # Voting
    # ----------------------------------------------------------------------
    def has_voted(self, feature_request_id: str) -> bool:
        return feature_request_id in self.voted_request_ids

    def get(self, feature_request_id: str) -> Optional[FeatureRequest]:
        for request in self.feature_requests:
            if request.id == feature_request_id:
                return request
        return None

    def toggle_vote(self, feature_request_id: str) -> bool:
        """Vote for, or remove the vote from, ``feature_request_id``.

        Returns ``True`` when the new state stands (including the
        already-voted reconciliation) and ``False`` after a rollback, in
        which case ``vote_error`` / ``vote_error_message`` describe why.
        """
        currently_voted = feature_request_id in self.voted_request_ids
        target_voted = not currently_voted

        before = self.get(feature_request_id)
        optimistic = before.with_vote(target_voted) if before is not None else None

        # optimistic update
        if optimistic is not None:
            self._replace(feature_request_id, optimistic)
        self._set_membership(feature_request_id, target_voted)
        self.vote_error = None
        self.vote_error_message = None

        try:
            if currently_voted:
                self.api.unvote(feature_request_id)
            else:
                self.api.vote(feature_request_id)
        except AlreadyVotedError:
            # Server already counts this vote: keep the increment, force voted.
            self.logger.info(
                "[FeatureRequestStore] %s already voted server-side; keeping vote",
                feature_request_id,
            )
            self.voted_request_ids.add(feature_request_id)
            return True
        except FeaturePulseError as e:
            self.logger.warning(
                "[FeatureRequestStore] %s on %s failed, rolling back: %s",
                "unvote" if currently_voted else "vote",
                feature_request_id,
                e,
            )
            self._rollback(feature_request_id, before, optimistic, currently_voted)
            self.vote_error = e
            self.vote_error_message = e.message
            return False

        return True

    # ----------------------------------------------------------------------
    # Submitting
    # ----------------------------------------------------------------------
    def submit_feature_request(
        self,
        title: str,
        description: str,
        email: Optional[str] = None,
        reload: bool = True,
    ) -> FeatureRequestDraft:
        """Validate and submit a new feature request.

        Raises:
            FeatureRequestValidationError: title/description out of bounds.
            PaymentRequiredError: the server disallows creation for this user.
            FeaturePulseError: any API failure; ``submit_error`` is set and
                ``is_submitting`` is cleared so the form can retry.
        """
        self.submit_error = None
        draft = self.validator.validate(title, description, email)

        config = self.server_config.current
        if not config.permissions.can_create_feature_request:
            error = PaymentRequiredError()
            self.submit_error = error
            raise error

        # Email is only collected when the dashboard enables the field
        email_to_send = draft.email if config.show_sdk_email_field else None

        self.is_submitting = True
        try:
            self.api.submit_feature_request(draft.title, draft.description, email=email_to_send)
        except FeaturePulseError as e:
            self.logger.warning("[FeatureRequestStore] Submitting feature request failed: %s", e)
            self.submit_error = e
            raise
        finally:
            self.is_submitting = False

        if reload:
            self.load_feature_requests(is_refresh=True)
        return draft

    # ----------------------------------------------------------------------
    # Internals
    # ----------------------------------------------------------------------
    def _replace(self, feature_request_id: str, new_value: FeatureRequest) -> bool:
        for index, request in enumerate(self.feature_requests):
            if request.id == feature_request_id:
                self.feature_requests[index] = new_value
                return True
        return False

    def _set_membership(self, feature_request_id: str, voted: bool) -> None:
        if voted:
            self.voted_request_ids.add(feature_request_id)
        else:
            self.voted_request_ids.discard(feature_request_id)

    def _rollback(
        self,
        feature_request_id: str,
        before: Optional[FeatureRequest],
        optimistic: Optional[FeatureRequest],
        previously_voted: bool,
    ) -> None:
        if before is not None:
            current = self.get(feature_request_id)
            if current is None or current is not optimistic:
                # A refresh replaced the item in the meantime; its data wins.
                self.logger.debug(
                    "[FeatureRequestStore] Skipping rollback of %s: item superseded",
                    feature_request_id,
                )
                return
            self._replace(feature_request_id, before)

        self._set_membership(feature_request_id, previously_voted)
