# Copyright (C) 2021 The Postbox Contributors
#
# This file is part of Postbox.
#
# Postbox is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# Postbox is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with Postbox.  If not, see <http://www.gnu.org/licenses/>.
"""`BaseRequestHandler`: the tools used in tornado handlers.
"""
import json
import logging
from typing import Any, Dict, Optional

from tornado.web import HTTPError, RequestHandler

from postbox.errors import PostboxError, ValidationError
from postbox.service import MailService

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


class BaseRequestHandler(RequestHandler):
    """The tools used while handling requests.

    Every response is JSON and carries `CORS_HEADERS`. Errors are answered as `{"error": "..."}`:

    - `postbox.errors.PostboxError` under 500 uses its own status code and message.
    - 404 and 405 (a method the route does not support) are both answered as 404 "Not found".
    - Any other failure is 500 with `failure_message`, nothing about the failure itself is sent to the client.

    Typical usage:
    Use it instead of `tornado.web.RequestHandler`.
    ````python
    class FooRequestHandler(BaseRequestHandler):
        failure_message = "Failed to foo"
        ...
    ````
    """

    failure_message = "Internal server error"
    """The message in 500 responses."""

    __logger = logging.getLogger("postbox.apigate.BaseRequestHandler")

    def initialize(self) -> None:
        settings = self.application.settings
        self._mail_service: MailService = settings["mail_service"]

    @property
    def mail_service(self) -> MailService:
        """Mail service of the instance."""
        return self._mail_service

    def set_default_headers(self) -> None:
        self.set_header("Content-Type", "application/json; charset=UTF-8")
        for name, value in CORS_HEADERS.items():
            self.set_header(name, value)

    def options(self, *args: str) -> None:
        """CORS preflight: 200 without body."""
        self.clear_header("Content-Type")
        self.set_status(200)
        self.finish()

    def json_body(self) -> Dict[str, Any]:
        """Decode the request body as a JSON object.

        Raise `postbox.errors.ValidationError` if the body is not a JSON object.
        """
        try:
            body = json.loads(self.request.body or b"")
        except ValueError:
            raise ValidationError("Invalid request body")
        if not isinstance(body, dict):
            raise ValidationError("Invalid request body")
        return body

    def user_id_from_body(self) -> str:
        user_id = self.json_body().get("userId")
        if not isinstance(user_id, str) or not user_id:
            raise ValidationError()
        return user_id

    def respond(self, body: Dict[str, Any], status_code: int = 200) -> None:
        self.set_status(status_code)
        self.finish(json.dumps(body))

    def log_exception(self, typ, value, tb) -> None:
        if isinstance(value, PostboxError) and value.status_code < 500:
            self.__logger.info(
                "{method} {uri}: {status} {message}".format(
                    method=self.request.method,
                    uri=self.request.uri,
                    status=value.status_code,
                    message=value.message,
                )
            )
        else:
            super().log_exception(typ, value, tb)

    def write_error(self, status_code: int, **kwargs: Any) -> None:
        exc_info: Optional[tuple] = kwargs.get("exc_info")
        error = exc_info[1] if exc_info else None
        if isinstance(error, PostboxError) and error.status_code < 500:
            self.respond({"error": error.message}, error.status_code)
        elif status_code in (404, 405):
            self.respond({"error": "Not found"}, 404)
        elif isinstance(error, HTTPError) and status_code < 500:
            self.respond({"error": self._reason}, status_code)
        else:
            self.respond({"error": self.failure_message}, 500)


class NotFoundHandler(BaseRequestHandler):
    """The handler for all unmatched paths. Answer 404 except CORS preflight."""

    def prepare(self) -> None:
        if self.request.method != "OPTIONS":
            raise HTTPError(404)
