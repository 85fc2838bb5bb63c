from __future__ import annotations
from datetime import datetime  # noqa: TC003
from .base import PayloadModel


__all__ = (
    'Embed',
    'EmbedAuthor',
    'EmbedField',
    'EmbedFooter',
    'EmbedImage',
    'EmbedThumbnail',
)


class EmbedFooter(PayloadModel):
    text: str
    icon_url: str | None = None
    proxy_icon_url: str | None = None


class EmbedImage(PayloadModel):
    url: str
    proxy_url: str | None = None
    height: int | None = None
    width: int | None = None


class EmbedThumbnail(PayloadModel):
    url: str
    proxy_url: str | None = None
    height: int | None = None
    width: int | None = None


class EmbedAuthor(PayloadModel):
    name: str
    url: str | None = None
    icon_url: str | None = None
    proxy_icon_url: str | None = None


class EmbedField(PayloadModel):
    name: str
    value: str
    inline: bool | None = None


class Embed(PayloadModel):
    title: str | None = None
    type: str | None = None
    description: str | None = None
    url: str | None = None
    timestamp: datetime | None = None
    color: int | None = None
    footer: EmbedFooter | None = None
    image: EmbedImage | None = None
    thumbnail: EmbedThumbnail | None = None
    author: EmbedAuthor | None = None
    fields: tuple[EmbedField, ...] | None = None
