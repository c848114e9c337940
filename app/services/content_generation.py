"""Client for the LLM content generation provider (OpenAI-compatible chat API)."""
import logging
from typing import List, Optional

from openai import AsyncOpenAI, OpenAIError

from app.models.assets import AssetData, Category
from app.models.errors import ContentGenerationError
from app.utils.prompts import (
    ASSET_CATEGORY_SYSTEM_PROMPT,
    ASSET_DESCRIPTION_SYSTEM_PROMPT,
    PromptManager,
    RequestType,
    prompt_manager as default_prompt_manager,
)

logger = logging.getLogger(__name__)

CLASSIFIABLE_CATEGORIES = {
    category.value for category in Category if category is not Category.DEFAULT
}


def parse_tags(raw: str) -> List[str]:
    """Split a comma-separated completion into trimmed, non-empty tags."""
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def parse_category(raw: str) -> Category:
    """Map a classification completion to a Category, falling back to Default."""
    candidate = raw.strip().strip(".").strip("\"'`* ")
    if candidate in CLASSIFIABLE_CATEGORIES:
        return Category(candidate)
    logger.warning(f"Invalid category returned: {raw!r}, using Default category")
    return Category.DEFAULT


class ContentGenerator:
    """
    Generates asset content through an OpenAI-compatible chat completions API.

    OpenAI, DeepSeek and Ollama are all reached through the same SDK, only the
    base URL and model differ.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        timeout: float = 60.0,
        prompts: Optional[PromptManager] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self.model = model
        self.prompts = prompts or default_prompt_manager
        self.client = client or AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)

    async def close(self) -> None:
        await self.client.close()

    async def complete(
        self,
        system_message: str,
        user_message: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """
        Run one chat completion and return the trimmed text.

        Raises:
            ContentGenerationError: If the provider call fails
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_message},
                    {"role": "user", "content": user_message},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except OpenAIError as exc:
            raise ContentGenerationError(f"Generation provider call failed: {exc}") from exc

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()

    async def _generate(
        self,
        asset: AssetData,
        request_type: RequestType,
        max_tokens: int,
        temperature: float,
    ) -> str:
        prompt = self.prompts.build_prompt(asset, request_type)
        try:
            return await self.complete(
                prompt.system_message,
                prompt.user_message,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except ContentGenerationError as exc:
            logger.error(f"Failed to generate {request_type.value}: {exc}")
            raise

    async def generate_description(self, asset: AssetData) -> str:
        logger.debug(f"Generating description for place: {asset.display_name.text}")
        description = await self._generate(asset, RequestType.DESCRIPTION, 150, 0.7)
        logger.debug("Description generated successfully")
        return description

    async def generate_tags(self, asset: AssetData) -> List[str]:
        logger.debug(f"Generating tags for place: {asset.display_name.text}")
        tags = parse_tags(await self._generate(asset, RequestType.TAGS, 50, 0.5))
        logger.debug(f"Generated {len(tags)} tags")
        return tags

    async def generate_landing_page(self, asset: AssetData) -> str:
        logger.debug(f"Generating landing page for place: {asset.display_name.text}")
        return await self._generate(asset, RequestType.LANDING_PAGE, 2000, 0.7)

    async def generate_asset_description(self, asset: AssetData) -> str:
        """Long-form description written from the full asset JSON."""
        logger.debug(f"Generating asset description for: {asset.display_name.text}")
        try:
            return await self.complete(
                ASSET_DESCRIPTION_SYSTEM_PROMPT,
                asset.model_dump_json(by_alias=True, exclude_none=True),
                max_tokens=500,
                temperature=0.7,
            )
        except ContentGenerationError as exc:
            logger.error(f"Failed to generate asset description: {exc}")
            raise

    async def classify_category(self, asset: AssetData) -> Category:
        """
        Classify an asset into one of the high-level categories.

        Never raises: provider failures and unrecognized answers both yield
        `Category.DEFAULT`.
        """
        logger.debug(f"Classifying asset category for: {asset.display_name.text}")
        try:
            raw = await self.complete(
                ASSET_CATEGORY_SYSTEM_PROMPT,
                asset.model_dump_json(by_alias=True, exclude_none=True),
                max_tokens=50,
                temperature=0.3,
            )
        except ContentGenerationError as exc:
            logger.error(f"Failed to classify asset category: {exc}")
            return Category.DEFAULT

        category = parse_category(raw)
        if category is not Category.DEFAULT:
            logger.info(f"Asset category classified as {category.value}")
        return category
