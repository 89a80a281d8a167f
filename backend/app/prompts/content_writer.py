"""Prompt fragments for single-field content generation."""

CONTENT_WRITER_SYSTEM_PROMPT = (
    'You are a professional content writer. The keyword for this content is "{keyword}". '
    'Never output the word "KEYWORD" in uppercase - always replace it with the actual '
    'keyword: "{keyword}".'
)

# Appended to the system prompt for picture fields
PICTURE_UNIQUENESS_RULES = """ CRITICAL UNIQUENESS RULES:
1. NEVER use "stress-free", "stress free", "worry-free", "hassle-free" or similar phrases if ANY other picture uses them
2. NEVER use "seamless", "smooth", "easy" if already used
3. NEVER use "eco-friendly", "environmentally" if already used
4. Each picture MUST focus on a COMPLETELY DIFFERENT benefit or aspect
5. DO NOT repeat ANY key phrases or themes from other pictures
6. Be creative - use unique angles like: speed, local expertise, family-owned, licensed/insured, scheduling flexibility, transparent pricing, equipment quality, team experience, service areas, guarantees, etc.
7. NEVER start multiple descriptions with the same structure or phrase"""

SUBTOPICS_CONTEXT = """

The following subtopics were found for {keyword}:
{subtopics_list}

Use these subtopics to generate the content as specified above."""

COMPETITOR_CONTEXT = """

Competitor URLs to reference for inspiration (but create original content): {urls}"""

UNIQUENESS_HEADER = """

CRITICAL UNIQUENESS REQUIREMENT: You MUST create a completely different description.

"""

UNIQUENESS_USED_PHRASES = """ALREADY USED TITLES/PHRASES (DO NOT REPEAT SIMILAR CONCEPTS):
{phrases}

"""

UNIQUENESS_THEMES = """AVOID ALL THESE THEMES/WORDS: {themes}

"""

UNIQUENESS_PREVIOUS = """Previous descriptions for reference (DO NOT COPY OR REPEAT):
{descriptions}

"""

UNIQUENESS_CLOSING = (
    "Generate a COMPLETELY UNIQUE description with DIFFERENT themes, benefits, and focus "
    'areas. Do not use "stress-free", "worry-free", "seamless" or similar concepts if '
    "they've been used. Be creative and explore entirely new angles."
)
