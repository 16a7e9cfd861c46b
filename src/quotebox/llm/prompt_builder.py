"""
Prompt builder for quote generation requests.

Responsible for:
- Loading and rendering Jinja2 templates (system + user prompts)
- Constructing the complete ChatCompletionRequest (model, sampling params)
"""

from pathlib import Path
from typing import Optional

import structlog
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from quotebox.models.enums import ChatRole
from quotebox.models.llm_models import ChatCompletionRequest, ChatMessage

logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "prompts"
DEFAULT_TEMPERATURE = 0.8
DEFAULT_MAX_TOKENS = 150


class PromptBuilder:
    """
    Build chat-completion requests from a tag.

    The system prompt fixes persona and output format (quote text only);
    the user prompt interpolates the tag into a request for a 1-2 sentence
    inspirational quote.
    """

    def __init__(
        self,
        model: str,
        templates_dir: Optional[Path] = None,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        """
        Initialize prompt builder.

        Args:
            model: Model identifier sent with every request
            templates_dir: Directory containing prompt templates
                (defaults to the packaged templates)
            temperature: Sampling temperature
            max_tokens: Maximum output tokens
        """
        self.model = model
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        self.temperature = temperature
        self.max_tokens = max_tokens

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,  # Prompts, not HTML
            undefined=StrictUndefined,
        )

        try:
            self.system_template = self.jinja_env.get_template("system_prompt.txt")
            self.user_template = self.jinja_env.get_template("user_prompt_template.txt")
            logger.info("Loaded prompt templates", templates_dir=str(self.templates_dir))
        except Exception as e:
            logger.error("Failed to load prompt templates", error=str(e))
            raise

    def build_system_prompt(self) -> str:
        """System prompt is static (no variables)."""
        return self.system_template.render().strip()

    def build_user_prompt(self, tag: str) -> str:
        return self.user_template.render(tag=tag).strip()

    def build_messages(self, tag: str) -> list[ChatMessage]:
        return [
            ChatMessage(role=ChatRole.SYSTEM, content=self.build_system_prompt()),
            ChatMessage(role=ChatRole.USER, content=self.build_user_prompt(tag)),
        ]

    def build_request(self, tag: str) -> ChatCompletionRequest:
        """
        Build the complete chat-completion request for ``tag``.

        Args:
            tag: Normalized tag

        Returns:
            ChatCompletionRequest ready to be serialized
        """
        request = ChatCompletionRequest(
            model=self.model,
            messages=self.build_messages(tag),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        logger.debug(
            "Built quote request",
            model=self.model,
            tag=tag,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return request
