# Embedded rendering: results decide per response whether associations are rendered
# in full (embedded) or as identifiers only
from typing import Any, Iterable, Optional


class Embedded:
    """
    Mixin for results that support embedded associations

    `show_associations` is None until somebody sets it explicitly,
    the EmbeddedResponseListener only fills in unset values.
    """

    show_associations = None


class CollectionResponse(Embedded):
    """
    Wraps the instances of a collection response

    `inherited_show_associations` is passed on to the items that haven't set their own flag.
    """

    def __init__(self, items: Optional[Iterable[Any]] = None, meta: Optional[dict] = None) -> None:
        self.items = list(items) if items is not None else []
        self.meta = meta if meta is not None else {}
        self.inherited_show_associations: Optional[bool] = None

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def item_show_associations(self, item: Any) -> bool:
        """
        :return: the item's own flag, else the inherited flag, else the collection's flag, else False
        """
        for flag in (getattr(item, "show_associations", None), self.inherited_show_associations, self.show_associations):
            if flag is not None:
                return bool(flag)
        return False

    def to_dict(self) -> dict:
        data = []
        for item in self.items:
            if callable(getattr(item, "to_dict", None)):
                item = item.to_dict(embedded=self.item_show_associations(item))
            data.append(item)
        meta = dict(self.meta)
        meta["count"] = len(self.items)
        return {"data": data, "meta": meta}
