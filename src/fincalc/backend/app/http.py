"""JSON error bodies shared by the FinCalc blueprints and error handlers."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from flask import jsonify


@dataclass(frozen=True)
class ProblemResponse:
    """Error payload of the form ``{"error", "status", "message"}``."""

    error: str
    status: HTTPStatus
    message: str | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error, "status": int(self.status)}
        if self.message:
            payload["message"] = self.message
        return payload

    def to_response(self) -> tuple[Any, int]:
        """Convert the problem into a Flask ``(response, status)`` tuple."""

        return jsonify(self.as_dict()), int(self.status)


def problem_response(error: str, *, status: int, message: str | None = None) -> ProblemResponse:
    return ProblemResponse(error=error, status=HTTPStatus(status), message=message)


def not_found(message: str) -> tuple[Any, int]:
    """Shortcut for unknown calculators and undeclared tax years."""

    return problem_response("not_found", status=HTTPStatus.NOT_FOUND, message=message).to_response()


__all__ = ["ProblemResponse", "not_found", "problem_response"]
