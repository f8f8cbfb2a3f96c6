"""
Composition des filtres optionnels (branche, catégorie, période) en clause WHERE.

Chaque filtre présent devient un prédicat SQLAlchemy dont la valeur est un
paramètre lié : aucune valeur n'est jamais concaténée dans le texte SQL.
Le rendu des marqueurs (? pour SQLite, %(name)s pour psycopg2) est délégué
au dialecte du moteur.

Ordre fixe des prédicats : branche, catégorie, date de début, date de fin.
"""

import datetime as dt
import operator
from typing import Any, Callable, List, Mapping, NamedTuple, Optional, Union

from pydantic import BaseModel
from sqlalchemy import ColumnElement, Select, and_


class QueryFilters(BaseModel):
    """Filtres optionnels fournis par l'appelant. None = filtre absent."""
    branch_id: Optional[int] = None
    category: Optional[str] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None


class FilterRule(NamedTuple):
    field: str
    compare: Callable[[Any, Any], ColumnElement]


FILTER_RULES: tuple[FilterRule, ...] = (
    FilterRule("branch_id", operator.eq),
    FilterRule("category", operator.eq),
    FilterRule("start_date", operator.ge),
    FilterRule("end_date", operator.le),
)


def _bound_value(value: Any) -> Any:
    # Les dates sont stockées en texte ISO : on compare texte contre texte
    if isinstance(value, dt.date):
        return value.isoformat()
    return value


def build_conditions(filters: QueryFilters, columns: Mapping[str, Any]) -> List[ColumnElement]:
    """
    Retourne la liste ordonnée des prédicats pour les filtres présents.
    Un filtre sans colonne associée dans `columns` est ignoré.
    """
    conditions = []
    for rule in FILTER_RULES:
        value = getattr(filters, rule.field)
        if value is None or value == "":
            continue
        column = columns.get(rule.field)
        if column is None:
            continue
        conditions.append(rule.compare(column, _bound_value(value)))
    return conditions


def apply_filters(stmt: Select, filters: QueryFilters, columns: Mapping[str, Any]) -> Select:
    """Ajoute la conjonction des prédicats à `stmt`, ou aucune clause WHERE si aucun filtre."""
    conditions = build_conditions(filters, columns)
    if not conditions:
        return stmt
    return stmt.where(and_(*conditions))


def parse_branch_scope(value: Union[str, int, None]) -> Optional[int]:
    """
    Interprète le paramètre ?branch_id= des listes et statistiques.
    None, "" et "all" signifient toutes les branches.
    Lève ValueError si la valeur n'est pas un entier.
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value
    value = value.strip()
    if value == "" or value.lower() == "all":
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Identifiant de branche invalide : '{value}'.")
