"""Submission finite state machine."""

from __future__ import annotations

from enum import Enum


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    COMMITTED = "committed"
    FAILED = "failed"


class SubmissionEvent(str, Enum):
    SUBMIT = "submit"
    VALIDATION_PASSED = "validation_passed"
    VALIDATION_FAILED = "validation_failed"
    RECORD_CONFIRMED = "record_confirmed"
    RECORD_FAILED = "record_failed"
    REPORTED = "reported"


_TRANSITIONS = {
    (SubmissionState.IDLE, SubmissionEvent.SUBMIT): SubmissionState.VALIDATING,
    (
        SubmissionState.VALIDATING,
        SubmissionEvent.VALIDATION_PASSED,
    ): SubmissionState.SUBMITTING,
    (
        SubmissionState.VALIDATING,
        SubmissionEvent.VALIDATION_FAILED,
    ): SubmissionState.FAILED,
    (
        SubmissionState.SUBMITTING,
        SubmissionEvent.RECORD_CONFIRMED,
    ): SubmissionState.COMMITTED,
    (SubmissionState.SUBMITTING, SubmissionEvent.RECORD_FAILED): SubmissionState.FAILED,
    (SubmissionState.COMMITTED, SubmissionEvent.REPORTED): SubmissionState.IDLE,
    (SubmissionState.FAILED, SubmissionEvent.REPORTED): SubmissionState.IDLE,
}


def transition(current: SubmissionState, event: SubmissionEvent) -> SubmissionState:
    try:
        return _TRANSITIONS[(current, event)]
    except KeyError as exc:
        raise ValueError(f"invalid transition from {current} via {event}") from exc
