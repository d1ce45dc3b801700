from langchain_core.prompts import PromptTemplate

MAP_TEMPLATE = """Write a detailed summary of this text section in bullet points.
Use '-' for bullet points and answer only the bullet points.
Text:
{text}

SUMMARY:"""

COMBINE_TEMPLATE = """Combine these summaries into a final summary in bullet points.
Remove duplicate points.
Use '-' for bullet points and answer only the bullet points.
Text:
{text}

FINAL SUMMARY:"""

MAP_PROMPT = PromptTemplate.from_template(MAP_TEMPLATE)
COMBINE_PROMPT = PromptTemplate.from_template(COMBINE_TEMPLATE)
