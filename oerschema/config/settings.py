"""
Configuration management for the OER Schema site generator.
"""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

FormatName = Literal["turtle", "ntriples", "rdfxml", "jsonld"]


class PathsConfig(BaseModel):
    """Project paths configuration."""

    schema_file: Path = Path("./config/schema.yml")
    output_dir: Path = Path("./dist")


class NamespacesConfig(BaseModel):
    """RDF namespaces configuration.

    The vocabulary is always published under a single base IRI. Extra
    prefixes are merged into the built-in table (rdf, rdfs, schema, owl,
    xsd, dcterms) and may be used in domain/range references.
    """

    vocab_prefix: str = "oer"
    vocab_iri: str = "http://oerschema.org/"
    extra: dict[str, str] = Field(default_factory=dict)


class OutputConfig(BaseModel):
    """Output configuration."""

    formats: list[FormatName] = Field(
        default_factory=lambda: ["jsonld", "turtle", "ntriples", "rdfxml"]
    )
    aggregate: bool = True
    verify_round_trip: bool = False


class ServerConfig(BaseModel):
    """Content server configuration.

    `formats` lists the RDF representations the negotiator may pick.
    Turtle alone reproduces the published site's behaviour.
    """

    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    content_root: Path | None = None  # defaults to paths.output_dir
    formats: list[FormatName] = Field(default_factory=lambda: ["turtle"])


class Settings(BaseSettings):
    """Main configuration class."""

    model_config = SettingsConfigDict(
        env_prefix="OER_",
        env_nested_delimiter="__",
    )

    paths: PathsConfig = Field(default_factory=PathsConfig)
    namespaces: NamespacesConfig = Field(default_factory=NamespacesConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @property
    def content_root(self) -> Path:
        """Directory the server reads generated files from."""
        return self.server.content_root or self.paths.output_dir


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def load_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Settings object with loaded configuration
    """
    config_file = Path(config_path)

    if config_file.exists():
        with open(config_file, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}
    else:
        config_dict = {}

    return Settings(**config_dict)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
