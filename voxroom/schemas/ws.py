from __future__ import annotations

import math
from typing import Annotated, Any, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


def _all_finite(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, dict):
        return all(_all_finite(v) for v in value.values())
    if isinstance(value, list):
        return all(_all_finite(v) for v in value)
    return True


# ---- client -> server ----

class ChatSendIn(BaseModel):
    type: Literal["message"] = "message"
    text: str = ""

    @field_validator("text", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, (int, float, bool)):
            return str(v)
        return v


class TypingIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["typing"] = "typing"
    is_typing: bool = Field(False, alias="isTyping")

    @field_validator("is_typing", mode="before")
    @classmethod
    def _truthy(cls, v: Any) -> bool:
        return bool(v)


class SignalIn(BaseModel):
    type: Literal["signal"] = "signal"
    signal: Any = None  # opaque call-negotiation payload, relayed as-is

    @field_validator("signal")
    @classmethod
    def _finite_numbers_only(cls, v: Any) -> Any:
        # 1e400 parses to inf, which has no JSON form and would be re-encoded as null
        if not _all_finite(v):
            raise ValueError("signal contains a non-finite number")
        return v


ClientToServer = Annotated[Union[ChatSendIn, TypingIn, SignalIn], Field(discriminator="type")]

client_event_adapter: TypeAdapter[ClientToServer] = TypeAdapter(ClientToServer)


# ---- server -> clients ----

class SystemOut(BaseModel):
    type: Literal["system"] = "system"
    text: str
    users: List[str] = []


class UsersOut(BaseModel):
    type: Literal["users"] = "users"
    users: List[str] = []


class ChatMessageOut(BaseModel):
    type: Literal["message"] = "message"
    text: str
    username: str
    at: int  # epoch-ms


class TypingOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["typing"] = "typing"
    username: str
    is_typing: bool = Field(alias="isTyping")


class SignalOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["signal"] = "signal"
    from_: str = Field(alias="from")
    signal: Any = None


ServerToClient = Union[SystemOut, UsersOut, ChatMessageOut, TypingOut, SignalOut]
