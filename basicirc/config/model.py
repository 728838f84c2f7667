from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import ConfigError


class ClientConfig(BaseModel):
    """Connection settings taken from the command line.

    Attributes:
        host: IRC server hostname, e.g. irc.libera.chat.
        port: IRC server port, e.g. 6667.
        nick: Used as both user name and nick.
        channel: Channel to join; a leading '#' is added when missing.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    nick: str = Field(min_length=1)
    channel: str = Field(min_length=1)

    @field_validator("host", mode="before")
    @classmethod
    def strip_host(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("nick")
    @classmethod
    def validate_nick(cls, v: str) -> str:
        if any(ch.isspace() for ch in v):
            raise ValueError("nick must not contain whitespace")
        return v

    @field_validator("channel")
    @classmethod
    def normalize_channel(cls, v: str) -> str:
        """Strip whitespace and make sure the name carries a channel prefix."""
        v = v.strip()
        if not v or any(ch.isspace() for ch in v):
            raise ValueError("channel must be a single non-empty word")
        return v if v[0] in "#&+!" else f"#{v}"

    @classmethod
    def from_args(cls, values: Sequence[object]) -> ClientConfig:
        """Build from the four positional values host, port, nick, channel.

        Raises:
            ConfigError: wrong number of values or a value failed validation.
        """
        if len(values) != 4:
            raise ConfigError(
                "expected host, port, nick and channel", data={"count": len(values)}
            )
        host, port, nick, channel = values
        try:
            return cls(host=host, port=port, nick=nick, channel=channel)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigError(problems, data={"errors": e.error_count()}) from e
