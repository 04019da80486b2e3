import re

def clean_article_text(text: str) -> str:
    """
    Normalize line endings, drop mis-encoded em dashes and collapse runs of blank lines.
    """
    text = text.replace("\r\n", "\n")
    text = text.replace("â€”", "")
    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = text.strip()
    return text
