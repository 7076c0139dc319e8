"""Request options shared by every request (session, partner, locale)."""
from ..objects import KalturaObjectBase, PropertyType, prop


class KalturaRequestOptions(KalturaObjectBase):
    """
    Options sent along with a request.

    Client-wide defaults are merged with per-request options; per-request
    values win.
    """

    _properties = (
        prop('ks', PropertyType.STRING),
        prop('partnerId', PropertyType.NUMBER),
        prop('language', PropertyType.STRING),
        prop('currency', PropertyType.STRING),
        prop('userId', PropertyType.STRING),
        prop('responseProfile', PropertyType.OBJECT, sub_type='KalturaBaseResponseProfile'),
    )
