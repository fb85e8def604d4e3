import logging
from typing import List, Optional

from openai import AsyncOpenAI

from carnival import config

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
MAX_TOKENS = 1000

SYSTEM_PROMPT = """You are CarnivalXperience AI, a friendly and knowledgeable digital concierge for the Calabar Carnival in Nigeria - Africa's biggest street party!

Your role is to help visitors:
- Discover exciting carnival events, parades, and performances
- Find suitable accommodation within their budget
- Navigate to venues and attractions
- Learn about local culture, food, and traditions
- Stay safe and informed during the carnival

Key facts about Calabar Carnival:
- Takes place annually in December in Calabar, Cross River State, Nigeria
- Features colorful parades, music, dance, and cultural performances
- Known as "Africa's Biggest Street Party"
- Includes band competitions, beauty pageants, and cultural displays
- The main parade route goes through Calabar's city center

Guidelines:
- Be warm, helpful, and enthusiastic about the carnival
- Provide specific, actionable recommendations
- Consider user's preferences and budget when suggesting options
- Prioritize safety information when relevant
- Use Nigerian English expressions occasionally for authenticity
- Keep responses concise but informative

You can help with:
- Event recommendations based on interests
- Hotel suggestions within budget
- Directions and navigation tips
- Local food and restaurant recommendations
- Safety tips and emergency information
- Cultural context and history
- Practical tips for enjoying the carnival"""

_client: Optional[AsyncOpenAI] = None


def get_client() -> Optional[AsyncOpenAI]:
    global _client
    if not config.OPENAI_API_KEY:
        return None
    if _client is None:
        _client = AsyncOpenAI(api_key=config.OPENAI_API_KEY, base_url=config.OPENAI_BASE_URL)
    return _client


def build_fallback_response(messages: List[dict]) -> str:
    last_user_message = next(
        ((m.get("content") or "").strip() for m in reversed(messages) if m.get("role") == "user"),
        "",
    )
    snippet = ""
    if last_user_message:
        if len(last_user_message) > 160:
            last_user_message = f"{last_user_message[:157]}…"
        snippet = f' regarding "{last_user_message}"'

    return "\n".join([
        f"Our AI concierge is warming up and can’t reach the Groq servers{snippet} right now.",
        "In the meantime you can:",
        "• Browse the Events hub for daily highlights",
        "• Check the Gallery for 2024 parade shots",
        "• Visit the Safety Center for on-ground tips",
        "",
        "Please try again in a bit once connectivity is restored.",
    ])


async def generate_chat_response(messages: List[dict]) -> str:
    client = get_client()
    if client is None:
        logger.info("OPENAI_API_KEY not set, answering with the offline concierge message")
        return build_fallback_response(messages)

    try:
        response = await client.chat.completions.create(
            model=config.CHAT_MODEL,
            messages=[{"role": "system", "content": SYSTEM_PROMPT}, *messages],
            temperature=TEMPERATURE,
            max_tokens=MAX_TOKENS,
        )
    except Exception as e:
        logger.warning("Falling back to offline concierge message: %s", e)
        return build_fallback_response(messages)

    if not response.choices:
        return ""
    return response.choices[0].message.content or ""
