"""
Bootstrap Payload Service.

Builds the typed payload handed to the client-side editor: translation
loading, image endpoints, editor initialisation and the save handler.
Rendering the payload into script is done by content_tools.services.scripts.
"""
import logging
import posixpath
from dataclasses import dataclass
from typing import NamedTuple, Optional

from django.conf import settings
from django.utils import translation
from django.utils.functional import Promise

from content_tools.exceptions import ConfigurationError
from content_tools.services.config_scope import EditorConfig

logger = logging.getLogger(__name__)

IMAGE_ENDPOINTS = ('upload', 'rotate', 'insert')


class CsrfPair(NamedTuple):
    """CSRF parameter name and token attached to editor requests."""
    param: str
    token: str


@dataclass(frozen=True)
class TranslationPayload:
    base_url: str
    language: str
    fallback: Optional[str] = None


@dataclass(frozen=True)
class ImagesPayload:
    """Image endpoints as [upload, rotate, insert]; both empty when disabled."""
    urls: tuple[str, ...] = ()
    csrf: tuple[str, ...] = ()

    @property
    def enabled(self) -> bool:
        return bool(self.urls)


@dataclass(frozen=True)
class SavePayload:
    url: str
    csrf: CsrfPair


@dataclass(frozen=True)
class EditorPayload:
    init_selector: str
    name_attribute: str
    save: Optional[SavePayload] = None


@dataclass(frozen=True)
class BootstrapPayload:
    translation: Optional[TranslationPayload]
    images: ImagesPayload
    editor: EditorPayload


def data_attribute(name: str) -> str:
    """Return the data-* attribute with the given name."""
    return f'data-{name}'


def application_language() -> str:
    return translation.get_language() or settings.LANGUAGE_CODE


def translation_languages(language: bool | str, app_language: str | None = None) -> tuple[str, str | None] | None:
    """
    Work out which translation files to try.

    Args:
        language: False (off), True (application language) or a language code
        app_language: Application language used when language is True

    Returns:
        (language, fallback) where fallback is the two-letter code for longer
        codes, or None when translation is off
    """
    if language is False:
        return None
    if language is True:
        language = app_language or application_language()

    lang = posixpath.basename(language.lower().rstrip('/'))
    if not lang:
        logger.warning(f"Ignoring unusable editor language {language!r}")
        return None
    fallback = lang[:2] if len(lang) > 2 else None
    return lang, fallback


def endpoint_url(value):
    """Endpoint url as a plain string; lazy urls such as reverse_lazy() are resolved."""
    if isinstance(value, Promise):
        return str(value)
    return value


def build_translation(config: EditorConfig, base_url: str, app_language: str | None = None) -> TranslationPayload | None:
    languages = translation_languages(config.language, app_language)
    if languages is None:
        return None
    lang, fallback = languages
    return TranslationPayload(base_url=base_url, language=lang, fallback=fallback)


def build_images(config: EditorConfig, csrf: CsrfPair) -> ImagesPayload:
    """
    Raises:
        ConfigurationError: if any of upload, rotate or insert is missing
    """
    if config.images_engine is False:
        return ImagesPayload()
    urls = tuple(endpoint_url(config.images_engine.get(name)) for name in IMAGE_ENDPOINTS)
    if not all(isinstance(url, str) and url for url in urls):
        raise ConfigurationError('images_engine', 'Invalid options for the images_engine configuration!')
    return ImagesPayload(urls=urls, csrf=tuple(csrf))


def build_editor(config: EditorConfig, csrf: CsrfPair) -> EditorPayload:
    """
    Raises:
        ConfigurationError: if saving is enabled without a save url
    """
    save = None
    if config.save_engine is not False:
        url = endpoint_url(config.save_engine.get('save'))
        if not isinstance(url, str) or not url:
            raise ConfigurationError('save_engine', 'Invalid options for the save_engine configuration!')
        save = SavePayload(url=url, csrf=csrf)
    return EditorPayload(
        init_selector=f'*[{data_attribute(config.data_init)}]',
        name_attribute=data_attribute(config.data_name),
        save=save,
    )


def build_bootstrap_payload(
    config: EditorConfig,
    csrf: CsrfPair,
    app_language: str | None = None,
    translations_url: str = '',
) -> BootstrapPayload:
    """Build the one-time bootstrap payload for a page."""
    return BootstrapPayload(
        translation=build_translation(config, translations_url, app_language),
        images=build_images(config, csrf),
        editor=build_editor(config, csrf),
    )
