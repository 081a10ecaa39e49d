"""Built-in catalogue of PRR shared infrastructure.

Ids are stable kebab-case keys; ``type`` is always ``infra`` so seeded records
are distinguishable from ``forge-project`` registrations. The Oracle SWS
database carries an account-level READ ONLY restriction as a first-class
constraint, not as a code guard.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from infragraph.domain.model import ConstraintType, EntityKind, EntityType

if TYPE_CHECKING:
    from infragraph.domain.model import Entity


def _infra(
    entity_id: str,
    kind: EntityKind,
    name: str,
    description: str,
    **extra: object,
) -> Entity:
    return {
        "id": entity_id,
        "type": EntityType.INFRA.value,
        "kind": kind.value,
        "name": name,
        "description": description,
        **extra,
    }


DEFAULT_SEED_ENTITIES: Final[tuple[Entity, ...]] = (
    _infra(
        "ext-microsoft-entra-id",
        EntityKind.SERVICE,
        "Microsoft Entra ID",
        "Primary authentication and identity provider for all PRR apps (Azure AD / OIDC / OAuth2)",
    ),
    _infra(
        "ext-ldap",
        EntityKind.SERVICE,
        "LDAP",
        "Authentication fallback and employee directory service",
    ),
    _infra(
        "ext-ukg-rest",
        EntityKind.SERVICE,
        "UKG REST API",
        "HR system of record: employee data, org structure, scheduling",
    ),
    _infra(
        "db-mssql-konami",
        EntityKind.DATABASE,
        "Konami Synkros (MSSQL)",
        "Slot management and banned patron database (Konami Synkros system)",
    ),
    _infra(
        "db-mssql-newwave",
        EntityKind.DATABASE,
        "NewWave Gaming (MSSQL)",
        "Casino CMS patron data (NewWave Gaming system)",
    ),
    _infra(
        "db-mssql-infogenesis",
        EntityKind.DATABASE,
        "InfoGenesis F&B POS (MSSQL)",
        "Food and beverage point-of-sale system at 172.30.120.10",
    ),
    _infra(
        "db-mssql-cct-prr",
        EntityKind.DATABASE,
        "CCT PRR (MSSQL)",
        "CCT database for Pearl River Resort property",
    ),
    _infra(
        "db-mssql-cct-bok-homa",
        EntityKind.DATABASE,
        "CCT Bok Homa (MSSQL)",
        "CCT database for Bok Homa Casino property",
    ),
    _infra(
        "db-mssql-cct-crystal-sky",
        EntityKind.DATABASE,
        "CCT Crystal Sky (MSSQL)",
        "CCT database for Crystal Sky at Choctaw property",
    ),
    _infra(
        "db-oracle-sws",
        EntityKind.DATABASE,
        "Oracle SWS/Silver",
        "Oracle SWS Silver database. Account-level READ ONLY restriction; "
        "no write possible at runtime.",
        constraints=[
            {
                "type": ConstraintType.ACCESS.value,
                "value": "READ ONLY: account-level restriction, no write possible at runtime",
            }
        ],
    ),
    _infra(
        "infra-harbor-registry",
        EntityKind.K8S_RESOURCE,
        "Harbor Container Registry",
        "Private container registry for all PRR projects",
        host="harbor.dev.pearlriverresort.com",
    ),
    _infra(
        "infra-microk8s",
        EntityKind.K8S_RESOURCE,
        "MicroK8s Cluster",
        "On-premises MicroK8s cluster. Namespace convention: prr-*. "
        "Use microk8s kubectl, never bare kubectl.",
        namespace_convention="prr-*",
    ),
    _infra(
        "pipeline-woodpecker",
        EntityKind.PIPELINE_STAGE,
        "Woodpecker CI",
        "Org-standard CI/CD pipeline (not GitHub Actions). Used for all PRR projects.",
    ),
)
