"""
Settings model for the registry MQTT publisher.

Uses Pydantic for validation. A single settings object replaces the
endpoint/client-id, persistence and credential constructor variants:
optional fields are left at their defaults when a variant does not need them.

Example:
    settings = PublisherSettings(
        endpoint="tcp://localhost:1883",
        client_id="registry-observer-1",
        credentials={"username": "registry", "password": "secret"},
    )
"""
from enum import Enum
from typing import Literal, Optional, Tuple
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Schema -> (Standardport, TLS, Transport)
SCHEMES = {
	"tcp": (1883, False, "tcp"),
	"mqtt": (1883, False, "tcp"),
	"ssl": (8883, True, "tcp"),
	"mqtts": (8883, True, "tcp"),
	"ws": (80, False, "websockets"),
	"wss": (443, True, "websockets"),
}


def parse_endpoint(endpoint: str) -> Tuple[str, str, int]:
	"""
	Splits a broker endpoint URI into scheme, host and port.

	Args:
		endpoint: Broker address, e.g. "tcp://localhost:1883"

	Returns:
		Tuple (scheme, host, port)

	Raises:
		ValueError: if scheme, host or port are invalid
	"""
	parts = urlsplit(endpoint.strip())
	scheme = parts.scheme.lower()
	if scheme not in SCHEMES:
		raise ValueError(
			f"Unsupported endpoint scheme '{parts.scheme}' in '{endpoint}', "
			f"expected one of {sorted(SCHEMES)}"
		)
	if not parts.hostname:
		raise ValueError(f"Endpoint '{endpoint}' has no host")
	try:
		port = parts.port
	except ValueError as e:
		raise ValueError(f"Endpoint '{endpoint}' has an invalid port") from e
	if port is None:
		port = SCHEMES[scheme][0]
	return scheme, parts.hostname, port


class PersistenceKind(str, Enum):
	"""Buffering strategy for in-flight messages."""
	MEMORY = "memory"
	FILE = "file"


class Credentials(BaseModel):
	model_config = ConfigDict(frozen=True)

	username: str
	password: Optional[str] = None

	@field_validator("username")
	@classmethod
	def validate_username(cls, v):
		if not v or not v.strip():
			raise ValueError("username must not be empty")
		return v


class PublisherSettings(BaseModel):
	model_config = ConfigDict(frozen=True)

	endpoint: str
	client_id: str
	credentials: Optional[Credentials] = None
	persistence: PersistenceKind = PersistenceKind.MEMORY
	persistence_dir: str = ".mqtt-persistence"
	qos: int = Field(default=1, ge=0, le=2)
	retain: bool = False
	keepalive: int = Field(default=60, gt=0)
	connect_timeout: float = Field(default=5.0, gt=0)
	clean_session: bool = True
	reconnect_min_delay: int = Field(default=1, ge=1)
	reconnect_max_delay: int = Field(default=120, ge=1)
	max_queued_messages: int = Field(default=0, ge=0)
	protocol: Literal["3.1.1", "5"] = "3.1.1"

	@field_validator("endpoint")
	@classmethod
	def validate_endpoint(cls, v):
		parse_endpoint(v)
		return v.strip()

	@field_validator("client_id")
	@classmethod
	def validate_client_id(cls, v):
		if not v or not v.strip():
			raise ValueError("client_id must not be empty")
		return v

	@model_validator(mode="after")
	def check_reconnect_delays(self):
		if self.reconnect_max_delay < self.reconnect_min_delay:
			raise ValueError("reconnect_max_delay must be >= reconnect_min_delay")
		return self

	@property
	def scheme(self) -> str:
		return parse_endpoint(self.endpoint)[0]

	@property
	def host(self) -> str:
		return parse_endpoint(self.endpoint)[1]

	@property
	def port(self) -> int:
		return parse_endpoint(self.endpoint)[2]

	@property
	def use_tls(self) -> bool:
		return SCHEMES[self.scheme][1]

	@property
	def transport(self) -> str:
		return SCHEMES[self.scheme][2]
