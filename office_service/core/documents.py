from bson import ObjectId
from bson.errors import InvalidId

from office_service.core.errors import NotFoundError


def parse_object_id(value: str, not_found_message: str) -> ObjectId:
    """
    path parameter 문자열 -> ObjectId.
    형식이 맞지 않는 id는 존재하지 않는 문서와 똑같이 404로 처리한다.
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise NotFoundError(not_found_message)


def serialize_document(raw: dict) -> dict:
    """
    MongoDB Document(dict) -> 응답용 dict.
    _id는 문자열 id로 바꾸고, 최상위 ObjectId 참조도 문자열로 바꾼다.
    """
    data = raw.copy()
    if "_id" in data:
        data["id"] = str(data.pop("_id"))
    for key, value in data.items():
        if isinstance(value, ObjectId):
            data[key] = str(value)
    return data
