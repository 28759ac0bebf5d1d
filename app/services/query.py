"""Общая выборка списков: фильтры, сортировка и пагинация по query-параметрам."""
import logging
from typing import Mapping, Optional
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy import inspect
from sqlalchemy.orm import Query

from app.config import Settings
from app.exceptions import ValidationFailedError

logger = logging.getLogger(__name__)

# Служебные параметры, не являющиеся фильтрами
RESERVED_PARAMS = {"page", "limit", "sort", "select"}

OPERATORS = {
    "gt": lambda column, value: column > value,
    "gte": lambda column, value: column >= value,
    "lt": lambda column, value: column < value,
    "lte": lambda column, value: column <= value,
}


def _coerce(column, raw: str):
    """Привести строку из query к типу колонки."""
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return raw
    if python_type is bool:
        lowered = raw.lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
        raise ValidationFailedError(f"Некорректное значение фильтра {column.key}: {raw}")
    if python_type in (int, float):
        try:
            return python_type(raw)
        except ValueError:
            raise ValidationFailedError(f"Некорректное значение фильтра {column.key}: {raw}")
    return raw


def _positive_int(raw: Optional[str], default: int, name: str) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationFailedError(f"Параметр {name} должен быть целым числом")
    if value < 1:
        raise ValidationFailedError(f"Параметр {name} должен быть больше нуля")
    return value


def apply_filters(query: Query, model, params: Mapping[str, str]) -> Query:
    """
    Применить фильтры из query-параметров.

    `field=value` - равенство, `field__gte=value` и т.п. - сравнение,
    `field__in=a,b` - вхождение в список. Неизвестные поля игнорируются.
    """
    columns = {column.key: column for column in inspect(model).columns}

    for key, raw in params.items():
        if key in RESERVED_PARAMS:
            continue
        field, _, operator = key.partition("__")
        column = columns.get(field)
        if column is None:
            continue
        attr = getattr(model, field)
        if not operator:
            query = query.filter(attr == _coerce(column, raw))
        elif operator == "in":
            values = [_coerce(column, item) for item in raw.split(",") if item != ""]
            query = query.filter(attr.in_(values))
        elif operator in OPERATORS:
            query = query.filter(OPERATORS[operator](attr, _coerce(column, raw)))
        else:
            raise ValidationFailedError(f"Неизвестный оператор фильтра: {operator}")
    return query


def apply_sort(query: Query, model, sort: Optional[str]) -> Query:
    """Сортировка `a,-b`; по умолчанию - сначала новые."""
    columns = {column.key for column in inspect(model).columns}
    order_by = []
    for item in (sort or "-created_at").split(","):
        item = item.strip()
        if not item:
            continue
        descending = item.startswith("-")
        field = item.lstrip("-")
        if field not in columns:
            raise ValidationFailedError(f"Нельзя сортировать по полю {field}")
        attr = getattr(model, field)
        order_by.append(attr.desc() if descending else attr.asc())
    # Стабильный порядок при равных значениях
    order_by.append(model.id.desc())
    return query.order_by(*order_by)


def parse_select(model, select: Optional[str]) -> Optional[set]:
    """Поля проекции `select=name,slug`; id возвращается всегда."""
    if not select:
        return None
    columns = {column.key for column in inspect(model).columns}
    fields = {item.strip() for item in select.split(",") if item.strip()}
    unknown = sorted(fields - columns)
    if unknown:
        raise ValidationFailedError(f"Нельзя выбрать поля: {', '.join(unknown)}")
    return fields | {"id"}


def paginate_query(query: Query, model, params: Mapping[str, str], settings: Settings) -> dict:
    """
    Отфильтровать, отсортировать и вернуть страницу выборки.

    Возвращает словарь формата PaginatedResponse.
    """
    select = parse_select(model, params.get("select"))
    page = _positive_int(params.get("page"), 1, "page")
    limit = min(_positive_int(params.get("limit"), settings.DEFAULT_PAGE_LIMIT, "limit"), settings.MAX_PAGE_LIMIT)

    query = apply_filters(query, model, params)
    total = query.count()
    query = apply_sort(query, model, params.get("sort"))

    start = (page - 1) * limit
    items = query.offset(start).limit(limit).all()

    pagination = {}
    if start + limit < total:
        pagination["next"] = {"page": page + 1, "limit": limit}
    if start > 0:
        pagination["prev"] = {"page": page - 1, "limit": limit}

    logger.debug(f"Выборка {model.__tablename__}: страница {page}, лимит {limit}, всего {total}")
    return {
        "success": True,
        "count": len(items),
        "pagination": pagination,
        "data": items,
        "select": select,
    }


def render_page(result: dict, extra_fields: tuple = ()):
    """
    Отдать страницу, сериализованную в схемы.

    Без `select` возвращает словарь для response_model. С `select`
    оставляет в элементах только выбранные поля (и extra_fields), поэтому
    отдается готовый JSONResponse в обход полной схемы ответа.
    """
    select = result.pop("select", None)
    if not select:
        return result
    include = set(select) | set(extra_fields)
    result["data"] = [item.model_dump(mode="json", include=include) for item in result["data"]]
    return JSONResponse(content=jsonable_encoder(result))
