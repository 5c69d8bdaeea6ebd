import pytest

from oaiclient.models import (
    FineTuneModelDeleteResponse,
    Model,
    Models,
    ModelsList,
    Permission,
)

FINE_TUNE_MODEL_ID = "fine-tune-model-id"


class RouteNotFound(Exception):
    pass


class FakeTransport:
    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def request(self, method, path, body=None, beta=False):
        self.calls.append((method, path, body, beta))
        if (method, path) not in self.routes:
            raise RouteNotFound(path)
        return self.routes[(method, path)]


def test_list_models():
    transport = FakeTransport(
        {("GET", "/models"): {"data": [{"id": "gpt-4", "owned_by": "system", "created": 5}]}}
    )
    result = Models(transport).list()
    assert result == ModelsList(models=[Model(id="gpt-4", owned_by="system", created_at=5)])
    assert transport.calls == [("GET", "/models", None, False)]


def test_list_models_empty_reply():
    transport = FakeTransport({("GET", "/models"): {}})
    assert Models(transport).list().models == []


@pytest.mark.parametrize("model_id", ["text-davinci-003", "o3", "o4-mini"])
def test_get_model(model_id):
    transport = FakeTransport({("GET", f"/models/{model_id}"): {"id": model_id}})
    assert Models(transport).get(model_id).id == model_id


def test_get_unknown_model_raises():
    with pytest.raises(RouteNotFound):
        Models(FakeTransport({})).get("unknown")


def test_delete_fine_tune_model():
    transport = FakeTransport(
        {
            ("DELETE", f"/models/{FINE_TUNE_MODEL_ID}"): {
                "id": FINE_TUNE_MODEL_ID,
                "object": "model",
                "deleted": True,
            }
        }
    )
    result = Models(transport).delete_fine_tune(FINE_TUNE_MODEL_ID)
    assert result == FineTuneModelDeleteResponse(
        id=FINE_TUNE_MODEL_ID, object="model", deleted=True
    )


def test_model_with_permissions():
    model = Model.from_dict(
        {
            "id": "m",
            "root": "r",
            "parent": "p",
            "permission": [
                {
                    "id": "perm",
                    "created": 7,
                    "allow_view": True,
                    "organization": "*",
                    "group": None,
                }
            ],
        }
    )
    assert (model.root, model.parent) == ("r", "p")
    assert model.permission == [
        Permission(id="perm", created_at=7, allow_view=True, organization="*")
    ]