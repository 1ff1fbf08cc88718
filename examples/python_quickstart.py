import asyncio
import logging

from feedbacker_client import FeedbackerClient

log = logging.getLogger("feedbacker.examples")
logging.basicConfig(level=logging.INFO)

OUTLINE = """1. Why pricing matters now:
  - market shifts
  - competitor moves

2. Packaging options
- good / better / best
- usage based

Q&A
"""


async def main() -> None:
    async with FeedbackerClient("http://localhost:8000", bearer_token="dev") as client:
        outline = await client.parse_outline(OUTLINE)
        for block in outline.blocks:
            log.info("topic %s -> %s", block.title, block.subtopics)

        stored = await client.serialize_feedback("Usage based pricing", "Please cover discounts")
        summary = await client.aggregate([stored, "- usage based pricing", "Topic: discounts"])
        for group in summary.groups:
            log.info("%dx %s", group.count, group.label)


if __name__ == "__main__":
    asyncio.run(main())
