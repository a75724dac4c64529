"""Category Linker — links each sibling card to the category of its own locale.

Invariants:
    - Only the first connected category is the source; other connected
      categories are left to the host's own relation handling
    - Empty connect list or empty source group: no lookups beyond what is needed, no writes
    - A sibling whose locale has no matching category is logged and skipped
    - No exception escapes; every outcome is recorded in the CategoryLinkReport

Design Decisions:
    - Per-sibling failures follow LinkErrorPolicy: CONTINUE (default) keeps
      linking the remaining siblings, ABORT stops the pass
    - Relation and table names are carried by CategoryLinkConfig so the same
      procedure serves any card/category pair
"""

import logging
from dataclasses import dataclass

from localesync.core.domain_types import (
    CATEGORIA_DE_MUSICA, CategoryLinkReport, LinkErrorPolicy, entity_uid,
)
from localesync.core.localization_plan import connect_refs, index_by_locale
from localesync.core.repository_protocols import QueryEngine

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryLinkConfig:
    relation_field: str = "categoria_de_musicas"
    category_entity: str = CATEGORIA_DE_MUSICA
    link_table: str = "categoria_de_musicas_card_musica_links"
    category_column: str = "categoria_de_musica_id"
    card_column: str = "card_musica_id"


async def link_card_categories(
    engine: QueryEngine,
    entity_name: str,
    data: dict,
    *,
    link: CategoryLinkConfig = CategoryLinkConfig(),
    on_error: LinkErrorPolicy = LinkErrorPolicy.CONTINUE,
    logger: logging.Logger | None = None,
) -> CategoryLinkReport:
    """Create one link row per sibling card of `data` whose locale has a category."""
    log = logger or _logger
    uid = entity_uid(entity_name)
    category_uid = entity_uid(link.category_entity)
    report = CategoryLinkReport()

    refs = connect_refs(data.get(link.relation_field))
    if not refs:
        log.info(f"No {link.relation_field} selected", extra={"entity": uid})
        return report

    source_id = refs[0].get("id")
    if source_id is None:
        log.info(f"Connected {link.relation_field} has no id", extra={"entity": uid})
        return report
    report.source_category_id = source_id

    sibling_ids = list(data.get("localizations") or [])
    try:
        source = await engine.query(category_uid).find_one(
            where={"id": source_id},
            populate={"localizations": True},
        )
        if not source or not source.get("localizations"):
            log.info(
                f"{category_uid} {source_id} has no localizations",
                extra={"entity": category_uid, "record_id": source_id},
            )
            return report
        if not sibling_ids:
            log.info(f"No sibling {uid} entries to link", extra={"entity": uid})
            return report

        cards = await engine.query(uid).find_many(
            select=["id", "locale"],
            where={"id": {"$in": sibling_ids}},
        )
    except Exception as e:
        log.error(
            f"Category lookup failed for {uid}: {e}",
            extra={"entity": uid, "record_id": source_id, "action": "link_categories"},
            exc_info=True,
        )
        report.aborted = True
        return report

    categories = index_by_locale(source["localizations"])
    for card in cards:
        category = categories.get(card["locale"])
        if category is None:
            log.info(
                f"No {category_uid} for locale {card['locale']}, skipping {uid} {card['id']}",
                extra={"entity": uid, "record_id": card["id"], "locale": card["locale"]},
            )
            report.skipped_card_ids.append(card["id"])
            continue

        try:
            await engine.query(link.link_table).create(data={
                link.category_column: category["id"],
                link.card_column: card["id"],
            })
        except Exception as e:
            log.error(
                f"Linking {uid} {card['id']} to {category_uid} {category['id']} failed: {e}",
                extra={"entity": uid, "record_id": card["id"], "locale": card["locale"]},
                exc_info=True,
            )
            report.failed_card_ids.append(card["id"])
            if on_error == LinkErrorPolicy.ABORT:
                report.aborted = True
                break
            continue
        report.linked.append((category["id"], card["id"]))

    log.info(
        f"Linked {len(report.linked)} {uid} localization(s) to {category_uid}",
        extra={"entity": uid, "count": len(report.linked), "action": "link_categories"},
    )
    return report
