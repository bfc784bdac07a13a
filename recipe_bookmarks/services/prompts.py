"""Prompts for LLM recipe section extraction."""

SECTION_EXTRACTION_SYSTEM_PROMPT = """You extract recipe ingredients and instructions from text.

STRICT RULES:
- Only copy text that is explicitly present in the input. Never invent, guess, estimate or complete anything.
- Keep the original wording and language. Do not translate or rephrase.
- Keep the original order. Put one ingredient or one step per line.
- If the text has no ingredient list, return an empty string for "ingredients".
- If the text has no cooking steps, return an empty string for "instructions".

Return JSON only, with exactly these keys:
{"ingredients": "line1\\nline2", "instructions": "step1\\nstep2"}"""


def get_section_extraction_prompt(content: str) -> str:
    """Generate the user prompt for section extraction."""
    return f"""Extract the ingredients and instructions from the following text.

TEXT:
{content}"""
