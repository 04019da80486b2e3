# article_prompt.py

ARTICLE_PROMPT = 'Write an article about "{topic}" that includes the keywords "{keywords}".'

ARTICLE_TITLE = "An article about {topic}"
