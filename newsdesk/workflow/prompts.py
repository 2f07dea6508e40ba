"""Prompt text used by the research pipeline and news feed."""

DEFAULT_BASE_PROMPT = (
    "Find the latest news articles relevant to our company and industry. Focus on recent "
    "developments, market trends, competitor activities, and regulatory changes that might "
    "impact our business."
)

# Field names here are the contract for every parser of generated articles.
ARTICLE_JSON_INSTRUCTIONS = """Please return the results as a JSON array of news articles with the following structure:
[
  {
    "title": "Article Title",
    "summary": "Brief summary of the article",
    "content": "Full content of the article",
    "url": "URL to the original article",
    "source": "Source name",
    "sourceUrl": "URL of the source",
    "imageUrl": "URL to an image for the article",
    "publishedAt": "Publication date in ISO format",
    "category": "Article category",
    "tags": ["tag1", "tag2", "tag3"]
  }
]"""

NEWS_SYSTEM_PROMPT = "You are a helpful assistant that provides news articles based on the given prompt."

OUTLINE_PROMPT = """Create a research outline for a news briefing.

{enhanced_prompt}

Return the research outline as a JSON object with the following structure:
{{
  "title": "Outline title",
  "sections": [
    {{"title": "Section title", "description": "What this section covers"}}
  ]
}}
Use between 3 and 7 sections, ordered from most to least important."""


def get_base_prompt(base_prompt: str | None) -> str:
    """Configured base prompt or the default instruction."""
    return base_prompt or DEFAULT_BASE_PROMPT
