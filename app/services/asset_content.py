"""
Orchestration of AI content generation for assets.

Description, tags and category are requested concurrently. The policy is
lenient: each output succeeds or fails on its own, a failed description
becomes "" and failed tags become []. Failures are logged and reported back
in `AiContent.failures` so the caller can decide what to persist.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List

from app.models.assets import AssetData, AssetUpdate, Category
from app.services.content_generation import ContentGenerator

logger = logging.getLogger(__name__)


@dataclass
class AiContent:
    description: str = ""
    tags: List[str] = field(default_factory=list)
    category: Category = Category.DEFAULT
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def complete(self) -> bool:
        return not self.failures

    def as_update(self) -> AssetUpdate:
        return AssetUpdate(
            category=self.category,
            ai_description=self.description,
            ai_tags=self.tags,
        )


class AssetContentService:
    """Service for generating AI content for assets."""

    def __init__(self, generator: ContentGenerator) -> None:
        self.generator = generator

    async def generate_ai_content(self, asset: AssetData) -> AiContent:
        """
        Generate description, tags and category for an asset.

        Never raises for provider failures; see `AiContent.failures`.
        """
        logger.debug(f"Generating AI content for asset: {asset.display_name.text}")

        description, tags, category = await asyncio.gather(
            self.generator.generate_description(asset),
            self.generator.generate_tags(asset),
            self.generator.classify_category(asset),
            return_exceptions=True,
        )

        content = AiContent()
        if isinstance(description, BaseException):
            content.failures["description"] = str(description)
        else:
            content.description = description

        if isinstance(tags, BaseException):
            content.failures["tags"] = str(tags)
        else:
            content.tags = tags

        # classify_category already falls back on its own
        if isinstance(category, Category):
            content.category = category
        elif isinstance(category, BaseException):
            logger.warning(f"Category classification raised, using Default: {category}")

        if content.failures:
            logger.error(
                f"Failed to generate AI content for {asset.external_id}: {content.failures}"
            )
        else:
            logger.info(f"Successfully generated AI content for {asset.external_id}")
        return content

    async def generate_landing_page(self, asset: AssetData) -> str:
        """
        Generate a landing page for an asset.

        Raises:
            ContentGenerationError: If the provider call fails
        """
        logger.debug(f"Generating landing page for asset: {asset.display_name.text}")
        landing_page = await self.generator.generate_landing_page(asset)
        logger.info(f"Successfully generated landing page for {asset.external_id}")
        return landing_page
