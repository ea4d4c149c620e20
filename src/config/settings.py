"""
Settings for parsing, rendering and module output

Read from MDJSX_* environment variables by pydantic-settings, e.g.
MDJSX_LANG_PREFIX=lang- or MDJSX_COMPONENT_NAME=Readme.
"""

from typing import Any, Dict

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Every field can be overridden by the matching MDJSX_ variable.

    Examples:
        MDJSX_PRAGMA=h
        MDJSX_BREAKS=true
        MDJSX_INITIAL_INDENT=4
    """

    model_config = SettingsConfigDict(
        env_prefix="MDJSX_",
        case_sensitive=False,
    )

    # Transformer configuration
    pragma: str = Field(
        default="createElement",
        description="Function name emitted for each embedded element",
    )

    # Renderer configuration
    lang_prefix: str = Field(
        default="language-",
        description="Class prefix added to fenced code blocks with a language",
    )

    breaks: bool = Field(
        default=False,
        description="Render soft line breaks as br elements",
    )

    initial_indent: int = Field(
        default=0,
        ge=0,
        description="Indent level the renderer starts from",
    )

    highlight_style: str = Field(
        default="default",
        description="Pygments style used by the optional highlighter",
    )

    # Module output configuration
    component_name: str = Field(
        default="MarkdownDocument",
        description="Name of the component exported by the compiler",
    )

    import_source: str = Field(
        default="react",
        description="Module the pragma and createFactory are imported from",
    )

    wrapper_element: str = Field(
        default="div",
        description="Root element wrapping the rendered document",
    )

    def options_make(self) -> Dict[str, Any]:
        """
        Build the markdown-it options mapping for these settings.

        Returns:
            Dict with the option names the renderer reads

        Example:
            >>> AppSettings(lang_prefix="lang-").options_make()["langPrefix"]
            'lang-'
        """
        return {
            "breaks": self.breaks,
            "langPrefix": self.lang_prefix,
            "initialIndent": self.initial_indent,
        }


# Shared defaults; pass an AppSettings to markdown_make() to override
appsettings = AppSettings()
