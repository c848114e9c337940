"""
Prompt construction for the content generation provider.

A prompt is a (system message, user message) pair. The system message is a
fixed persona; the user message renders the asset through a Jinja2 template
and appends the instruction text of the requested output type.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Union

import jinja2

from app.models.assets import AssetData
from app.models.errors import UnsupportedRequestTypeError
from app.utils.prompts.templates import PLACE_SYSTEM_MESSAGE, PLACE_USER_TEMPLATE


# Provider day numbering starts on Sunday
WEEKDAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def weekday_name(day: int) -> str:
    return WEEKDAYS[day % 7]


class RequestType(str, Enum):
    DESCRIPTION = "description"
    TAGS = "tags"
    LANDING_PAGE = "landing_page"


DEFAULT_REQUEST_DETAILS: Dict[str, str] = {
    RequestType.DESCRIPTION.value: (
        "Please create a compelling and unique description for this place. Focus on its "
        "distinctive features, atmosphere, and what makes it special. Include any notable "
        "aspects that would interest potential visitors."
    ),
    RequestType.TAGS.value: (
        "Please analyze this place and generate relevant, witty tags that capture its essence. "
        "Consider the business type, atmosphere, offerings, and unique characteristics. Include "
        "both practical and creative tags. Return the tags as a single comma-separated line."
    ),
    RequestType.LANDING_PAGE.value: (
        "Please create a modern, responsive HTML landing page for this place. The design "
        "should be visually appealing, mobile-friendly, and effectively showcase the location's "
        "key features. Include appropriate styling and a clear call-to-action. Return only the HTML document."
    ),
}


@dataclass(frozen=True)
class Prompt:
    system_message: str
    user_message: str


class PromptManager:
    """
    Builds prompts for every registered request type.

    The request-type table is process-wide configuration: extra types are
    registered at startup with `register_request_type`, before requests are served.
    """

    def __init__(self, request_details: Mapping[str, str] = DEFAULT_REQUEST_DETAILS):
        self._request_details: Dict[str, str] = dict(request_details)
        self._env = jinja2.Environment(
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.ChainableUndefined,
        )
        self._env.globals["weekday_name"] = weekday_name
        self._template = self._env.from_string(PLACE_USER_TEMPLATE)

    @property
    def request_types(self) -> list:
        return sorted(self._request_details)

    def register_request_type(self, request_type: str, details: str) -> None:
        """Add (or replace) the instruction text for a request type."""
        self._request_details[_type_key(request_type)] = details

    def build_prompt(
        self,
        asset: Union[AssetData, Dict[str, Any]],
        request_type: Union[RequestType, str],
    ) -> Prompt:
        """
        Render the prompt for `asset` and `request_type`.

        Raises:
            UnsupportedRequestTypeError: If the request type was never registered
        """
        key = _type_key(request_type)
        details = self._request_details.get(key)
        if details is None:
            raise UnsupportedRequestTypeError(key)

        context = asset.model_dump(mode="json") if isinstance(asset, AssetData) else dict(asset)
        context["request_type"] = key
        context["request_details"] = details

        return Prompt(
            system_message=PLACE_SYSTEM_MESSAGE,
            user_message=self._template.render(**context),
        )


def _type_key(request_type: Union[RequestType, str]) -> str:
    return request_type.value if isinstance(request_type, RequestType) else str(request_type)


prompt_manager = PromptManager()


def build_prompt(
    asset: Union[AssetData, Dict[str, Any]],
    request_type: Union[RequestType, str],
) -> Prompt:
    return prompt_manager.build_prompt(asset, request_type)


def register_request_type(request_type: str, details: str) -> None:
    prompt_manager.register_request_type(request_type, details)
