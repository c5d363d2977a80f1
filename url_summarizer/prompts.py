SUMMARIZE_PROMPT_TEMPLATE = (
    "Summarize the following web page content in one concise sentence:\n\n{content}"
)
