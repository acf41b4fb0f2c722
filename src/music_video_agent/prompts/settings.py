"""Settings extraction prompt"""

SETTING_EXTRACTION_PROMPT_TEMPLATE = {
    "template": """List every distinct location or environment used in the script below as a JSON array. Scenes that happen in the same place share one setting.

For each setting provide:
- id (short stable identifier, e.g. "rooftop-night")
- name
- description
- imagePrompt (a self-contained prompt to generate a reference image of the empty location, no characters)
- keyFeatures (3-5 visual elements that must stay consistent)

Script:
{script}

Return only a valid JSON array. Use double quotes.""",
    "schema": "setting_extraction"
}
