"""Request models for light state writes."""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Alert = Literal["none", "select", "lselect"]


class LightState(BaseModel):
    """Partial light state; only the fields that are set are sent.

    Field names are descriptive, the serialized keys are the bridge's own
    (``bri``, ``sat``, ``transitiontime``). Either spelling is accepted on
    construction.
    """

    model_config = ConfigDict(populate_by_name=True)

    on: Optional[bool] = Field(default=None, description="Switch the light on/off")
    brightness: Optional[int] = Field(
        default=None, ge=0, le=255, alias="bri", description="Brightness (0-255)"
    )
    saturation: Optional[int] = Field(
        default=None, ge=0, le=255, alias="sat", description="Saturation (0-255)"
    )
    hue: Optional[int] = Field(
        default=None, ge=0, le=65535, description="Hue (0-65535, degrees * 182)"
    )
    alert: Optional[Alert] = Field(
        default=None, description="select flashes once, lselect keeps flashing"
    )
    transition_time: Optional[int] = Field(
        default=None,
        ge=0,
        alias="transitiontime",
        description="Fade duration in tenths of a second, 0 is a hard switch",
    )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the JSON body expected by the bridge."""
        return self.model_dump(by_alias=True, exclude_none=True)


def state_payload(state: Any) -> Dict[str, Any]:
    """Normalize a ``LightState`` or mapping into a request body."""
    if state is None:
        return {}
    if isinstance(state, LightState):
        return state.to_payload()
    return dict(state)
