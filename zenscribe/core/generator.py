from langchain_core.prompts import PromptTemplate

from zenscribe.core.logger import log_event
from zenscribe.exceptions import GenerationFailed
from zenscribe.models.article import ArticleConfig, GeneratedText
from zenscribe.templates.article_prompt import ARTICLE_PROMPT, ARTICLE_TITLE


def build_prompt(config: ArticleConfig) -> str:
    """
    Instruction sent to the model. Uses topic and keywords only; tone is
    stored with the article but is not part of the instruction.
    """
    return ARTICLE_PROMPT.format(topic=config.topic, keywords=config.keywords)


def derive_title(topic: str) -> str:
    return ARTICLE_TITLE.format(topic=topic)


def build_llm(config: dict):
    """Create the langchain model selected by ``config["llm_backend"]``."""
    backend = config.get("llm_backend", "openai")
    if backend == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=config["openai_model"],
            temperature=config.get("temperature", 0.7),
            api_key=config["openai_api_key"]
        )
    if backend == "ollama":
        from langchain_ollama import OllamaLLM

        return OllamaLLM(
            model=config["ollama_model"],
            base_url=config["ollama_base_url"],
            temperature=config.get("temperature", 0.7)
        )
    raise ValueError(f"Unsupported llm_backend: {backend}")


class ArticleGenerator:
    """Sends one prompt per article to a langchain model."""

    def __init__(self, llm):
        self.llm = llm
        self.chain = PromptTemplate.from_template("{prompt}") | llm

    async def generate(self, config: ArticleConfig) -> GeneratedText:
        prompt = build_prompt(config)
        try:
            result = await self.chain.ainvoke({"prompt": prompt})
        except Exception as err:
            log_event("ERROR", f"Generation call failed: {err}", {"topic": config.topic})
            raise GenerationFailed("Article generation failed") from err

        # Chat models return a message, plain LLMs return the string itself.
        content = getattr(result, "content", result)
        if not isinstance(content, str) or not content.strip():
            log_event("ERROR", "Generation returned no text", {"topic": config.topic})
            raise GenerationFailed("Article generation returned no text")

        return GeneratedText(title=derive_title(config.topic), content=content)
