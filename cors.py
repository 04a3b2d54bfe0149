"""
CORS (Cross-Origin Resource Sharing) headers for every response.

The hook runs as an ``after_request`` function, so error responses (401, 404,
405, 500) carry the headers too and browser clients can read the error body.

    Simple request:   Origin -> Access-Control-Allow-Origin
    Preflight:        OPTIONS + Access-Control-Request-Method
                      -> Allow-Methods / Allow-Headers / Max-Age

With a wildcard origin and no credentials the response carries ``*``.
Otherwise the request Origin is echoed back when it is allowed, together with
``Vary: Origin`` so caches keep per-origin copies.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from flask import request


@dataclass
class CORSConfig:
    allow_origins: List[str] = field(default_factory=lambda: ["*"])
    allow_methods: List[str] = field(
        default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    )
    allow_headers: List[str] = field(
        default_factory=lambda: ["Authorization", "Content-Type", "X-Requested-With"]
    )
    expose_headers: List[str] = field(default_factory=list)
    allow_credentials: bool = False
    max_age: int = 86400

    @classmethod
    def from_app_config(cls, config) -> "CORSConfig":
        return cls(
            allow_origins=list(config.get("CORS_ALLOW_ORIGINS") or ["*"]),
            allow_methods=list(config.get("CORS_ALLOW_METHODS") or []),
            allow_headers=list(config.get("CORS_ALLOW_HEADERS") or []),
            expose_headers=list(config.get("CORS_EXPOSE_HEADERS") or []),
            allow_credentials=bool(config.get("CORS_ALLOW_CREDENTIALS", False)),
            max_age=int(config.get("CORS_MAX_AGE", 86400)),
        )

    @property
    def allows_any_origin(self) -> bool:
        return "*" in self.allow_origins

    def resolve_origin(self, origin: Optional[str]) -> Optional[str]:
        """Value for Access-Control-Allow-Origin, or None to omit it."""
        if self.allows_any_origin and not self.allow_credentials:
            return "*"
        if not origin:
            return None
        # credentials forbid "*", so echo the caller back
        if self.allows_any_origin or origin in self.allow_origins:
            return origin
        return None


def is_preflight(req) -> bool:
    return req.method == "OPTIONS" and "Access-Control-Request-Method" in req.headers


def apply_cors_headers(response, cors: CORSConfig, req):
    origin = req.headers.get("Origin")
    allowed = cors.resolve_origin(origin)

    if allowed != "*":
        response.vary.add("Origin")
    if allowed is None:
        return response

    headers = response.headers
    headers["Access-Control-Allow-Origin"] = allowed
    if cors.allow_credentials:
        headers["Access-Control-Allow-Credentials"] = "true"
    if cors.expose_headers:
        headers["Access-Control-Expose-Headers"] = ", ".join(cors.expose_headers)

    if is_preflight(req):
        headers["Access-Control-Allow-Methods"] = ", ".join(cors.allow_methods)
        requested = req.headers.get("Access-Control-Request-Headers")
        headers["Access-Control-Allow-Headers"] = ", ".join(cors.allow_headers) or (requested or "")
        headers["Access-Control-Max-Age"] = str(cors.max_age)
    return response


def init_cors(app) -> CORSConfig:
    cors = CORSConfig.from_app_config(app.config)
    app.extensions["cors"] = cors

    @app.after_request
    def add_cors_headers(response):
        return apply_cors_headers(response, cors, request)

    return cors
