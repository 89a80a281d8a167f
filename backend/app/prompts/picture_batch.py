"""Prompt for generating all picture captions in one call."""

PICTURE_BATCH_SYSTEM_PROMPT = (
    'You are a professional content writer. The keyword for this content is "{keyword}". '
    "Generate exactly {count} unique title and summary combinations for {keyword} services. "
    "Each combination should focus on a different aspect or benefit. "
    "Never repeat themes or key phrases between combinations."
)
