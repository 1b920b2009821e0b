"""Functional tests for the content model binder and its provider.

Covers the resolution order (null source, identity short-circuit, content
extraction, wrapper construction, last-chance conversion), both failure
kinds with their messages, failure observers and the async entry point that
reads route values.
"""

from __future__ import annotations

import asyncio
from typing import Any, List, Protocol

import pytest

from content_binder.errors import BindingFailureReason, ModelBindingError
from content_binder.logic.binder import ContentModelBinder
from content_binder.logic.binder_provider import ContentModelBinderProvider
from content_binder.logic.events import ModelBindingArgs
from content_binder.logic.model_factory import stale_model_observer
from content_binder.models.binding import (
    ConstrainedWrapper,
    ModelBindingContext,
    OtherType,
    PlainWrapper,
    RawContent,
    shape_for,
)
from content_binder.models.content import ContentNode, PublishedContent, PublishedContentWrapped
from content_binder.models.content_model import ContentModel, IContentModel
from content_binder.models.routing import ROUTE_DEFINITION_TOKEN, PublishedRequestBuilder, RouteValues


class ContentType1(PublishedContentWrapped):
    pass


class ContentType2(ContentType1):
    pass


class NonContentModel:
    pass


class MyCustomContentModel(ContentModel):
    pass


class Greeter(Protocol):
    def greet(self) -> str: ...


class ForeignContentModel:
    """Registered with the capability, but carries something that is not content."""

    @property
    def content(self) -> Any:
        return "not content"


IContentModel.register(ForeignContentModel)


def _node(node_id: int = 1, name: str = "Home") -> ContentNode:
    return ContentNode(node_id, name, content_type_alias="home", route="/")


def _published_content() -> PublishedContent:
    return ContentType2(_node())


def _routed_context(model_type: Any, content: PublishedContent) -> ModelBindingContext:
    request = PublishedRequestBuilder("https://example.com/").set_published_content(content).build()
    return ModelBindingContext(
        model_type=model_type,
        model_name=getattr(model_type, "__name__", "model"),
        route_data={ROUTE_DEFINITION_TOKEN: RouteValues(request)},
    )


@pytest.fixture
def binder() -> ContentModelBinder:
    return ContentModelBinder()


# -----------------------------
# Provider and shapes
# -----------------------------

@pytest.mark.parametrize(
    "model_type, expect_none",
    [
        (PublishedContent, False),
        (ContentModel, False),
        (ContentType1, False),
        (ContentModel[ContentType1], False),
        (NonContentModel, True),
        (MyCustomContentModel, True),
        (IContentModel, True),
    ],
)
def test_provider_returns_binder_for_content_shapes(model_type: Any, expect_none: bool) -> None:
    found = ContentModelBinderProvider().get_binder(model_type)
    if expect_none:
        assert found is None
    else:
        assert isinstance(found, ContentModelBinder)


def test_shape_for_reduces_model_types() -> None:
    assert shape_for(ContentModel) == PlainWrapper()
    assert shape_for(ContentModel[ContentType1]) == ConstrainedWrapper(ContentType1)
    assert shape_for(ContentType2) == RawContent(ContentType2)
    assert shape_for(int) == OtherType(int)


# -----------------------------
# Async entry point
# -----------------------------

def test_does_not_bind_when_route_token_missing(binder: ContentModelBinder) -> None:
    context = _routed_context(ContentModel, _published_content())
    context.route_data.pop(ROUTE_DEFINITION_TOKEN)

    asyncio.run(binder.bind_model_async(context))

    assert context.result.is_model_set is False


def test_does_not_bind_when_route_token_has_incorrect_model(binder: ContentModelBinder) -> None:
    context = _routed_context(ContentModel, _published_content())
    context.route_data[ROUTE_DEFINITION_TOKEN] = NonContentModel()

    asyncio.run(binder.bind_model_async(context))

    assert context.result.is_model_set is False


def test_binds_when_route_token_present(binder: ContentModelBinder) -> None:
    content = _published_content()
    context = _routed_context(ContentModel, content)

    asyncio.run(binder.bind_model_async(context))

    assert context.result.is_model_set is True
    assert context.model.content is content


def test_route_without_published_content_binds_nothing(binder: ContentModelBinder) -> None:
    request = PublishedRequestBuilder("https://example.com/").build()
    context = ModelBindingContext(model_type=ContentModel, route_data={ROUTE_DEFINITION_TOKEN: RouteValues(request)})

    asyncio.run(binder.bind_model_async(context))

    assert context.result.is_model_set is False


# -----------------------------
# Successful resolution
# -----------------------------

def test_null_source_binds_to_nothing(binder: ContentModelBinder) -> None:
    for model_type in (ContentType1, ContentModel, ContentModel[ContentType1], int):
        context = ModelBindingContext()
        binder.bind_model(context, None, model_type)
        assert context.model is None
        assert context.result.is_model_set is False


def test_returns_source_when_same_type(binder: ContentModelBinder) -> None:
    content = ContentType1(_node())
    assert binder.resolve(content, ContentType1).model is content


def test_content_model_to_published_content_unwraps(binder: ContentModelBinder) -> None:
    content = ContentType1(_node())
    render_model = ContentModel(content)

    result = binder.resolve(render_model, PublishedContent)

    assert result.model is content
    assert render_model.content is content


def test_published_content_to_content_model(binder: ContentModelBinder) -> None:
    content = ContentType1(_node())
    bound = binder.resolve(content, ContentModel).model
    assert isinstance(bound, ContentModel)
    assert bound.content is content


def test_published_content_to_generic_content_model(binder: ContentModelBinder) -> None:
    content = ContentType1(_node())
    bound = binder.resolve(content, ContentModel[ContentType1]).model
    assert isinstance(bound, IContentModel)
    assert bound.content is content
    assert bound.content_type is ContentType1


def test_generic_content_model_of_derived_type_binds_to_base(binder: ContentModelBinder) -> None:
    content = ContentType2(_node())
    source = ContentModel(content, content_type=ContentType2)

    result = binder.resolve(source, ContentModel[ContentType1])

    assert result.is_model_set is True
    assert result.model.content is content


def test_plain_wrapper_binds_to_wrapper_of_its_content_type(binder: ContentModelBinder) -> None:
    content = ContentType1(_node())
    result = binder.resolve(ContentModel(content), ContentModel[ContentType1])
    assert result.model.content is content
    assert result.model.content_type is ContentType1


def test_derived_content_binds_to_wrapper_of_base(binder: ContentModelBinder) -> None:
    content = ContentType2(_node())
    result = binder.resolve(content, ContentModel[ContentType1])
    assert result.model.content is content


def test_mapping_source_converts_to_content(binder: ContentModelBinder) -> None:
    bound = binder.resolve({"id": 7, "name": "About", "route": "/about/"}, ContentModel).model
    assert isinstance(bound.content, ContentNode)
    assert bound.content.id == 7
    assert bound.content.route == "/about/"


def test_last_chance_conversion_for_other_types(binder: ContentModelBinder) -> None:
    assert binder.resolve("42", int).model == 42

def test_wrapper_source_is_returned_unchanged_for_wrapper_target(binder: ContentModelBinder) -> None:
    source = ContentModel(ContentType1(_node()))
    assert binder.resolve(source, ContentModel).model is source


def test_other_type_source_is_returned_unchanged(binder: ContentModelBinder) -> None:
    source = 1234567
    assert binder.resolve(source, int).model is source


def test_rewrap_leaves_source_untouched(binder: ContentModelBinder) -> None:
    content = ContentType1(_node())
    source = ContentModel(content)

    result = binder.resolve(source, ContentModel[ContentType1])

    assert result.model is not source
    assert result.model.content_type is ContentType1
    assert source.content is content
    assert source.content_type is PublishedContent


def test_any_target_accepts_every_source(binder: ContentModelBinder) -> None:
    source = object()
    assert binder.resolve(source, Any).model is source


def test_non_runtime_protocol_target_is_unsupported() -> None:
    seen: List[ModelBindingArgs] = []
    binder = ContentModelBinder([lambda sender, args: seen.append(args)])

    with pytest.raises(ModelBindingError) as excinfo:
        binder.resolve(object(), Greeter)

    assert excinfo.value.reason is BindingFailureReason.UNSUPPORTED_CONVERSION
    assert excinfo.value.model_type is Greeter
    assert len(seen) == 1



# -----------------------------
# Failures
# -----------------------------

def test_throws_when_source_not_of_expected_type(binder: ContentModelBinder) -> None:
    with pytest.raises(ModelBindingError) as excinfo:
        binder.resolve(NonContentModel(), ContentModel)
    assert excinfo.value.reason is BindingFailureReason.UNSUPPORTED_CONVERSION
    assert excinfo.value.source_type is NonContentModel


def test_invalid_model_type_throws(binder: ContentModelBinder) -> None:
    with pytest.raises(ModelBindingError) as excinfo:
        binder.resolve("Hello", PublishedContent)
    assert excinfo.value.reason is BindingFailureReason.UNSUPPORTED_CONVERSION
    assert str(excinfo.value) == (
        "Cannot bind source type builtins.str to model type content_binder.models.content.PublishedContent."
    )


def test_custom_content_model_subclass_is_unsupported(binder: ContentModelBinder) -> None:
    with pytest.raises(ModelBindingError) as excinfo:
        binder.resolve(_published_content(), MyCustomContentModel)
    assert excinfo.value.reason is BindingFailureReason.UNSUPPORTED_CONVERSION


def test_generic_content_model_mismatch(binder: ContentModelBinder) -> None:
    content = ContentType1(_node())
    with pytest.raises(ModelBindingError) as excinfo:
        binder.resolve(content, ContentModel[ContentType2])
    error = excinfo.value
    assert error.reason is BindingFailureReason.CONTENT_TYPE_MISMATCH
    assert error.model_type is ContentType2
    assert error.message == (
        f"Cannot bind source content type {__name__}.ContentType1 to model content type {__name__}.ContentType2."
    )


def test_raw_content_mismatch(binder: ContentModelBinder) -> None:
    source = ContentModel(ContentType1(_node()))
    with pytest.raises(ModelBindingError) as excinfo:
        binder.resolve(source, ContentType2)
    assert excinfo.value.reason is BindingFailureReason.CONTENT_TYPE_MISMATCH
    assert excinfo.value.message == (
        f"Cannot bind source content type {__name__}.ContentType1 to model type {__name__}.ContentType2."
    )


def test_constrained_wrapper_rejects_mismatched_content() -> None:
    with pytest.raises(TypeError):
        ContentModel(ContentType1(_node()), content_type=ContentType2)
    with pytest.raises(ValueError):
        ContentModel(None)  # type: ignore[arg-type]


def test_subscripted_wrapper_enforces_its_constraint() -> None:
    with pytest.raises(TypeError):
        ContentModel[ContentType2](ContentType1(_node()))
    with pytest.raises(TypeError):
        ContentModel[ContentType2](ContentType2(_node()), content_type=ContentType1)

    content = ContentType1(_node())
    model = ContentModel[ContentType1](content)

    assert model.content is content
    assert model.content_type is ContentType1
    assert isinstance(model, ContentModel[ContentType1])
    assert ContentModel[ContentType1] is ContentModel[ContentType1]


def test_subscripted_wrapper_satisfies_its_own_target(binder: ContentModelBinder) -> None:
    source = ContentModel[ContentType1](ContentType1(_node()))
    assert binder.resolve(source, ContentModel[ContentType1]).model is source


def test_foreign_content_model_without_content_is_unsupported(binder: ContentModelBinder) -> None:
    with pytest.raises(ModelBindingError) as excinfo:
        binder.resolve(ForeignContentModel(), ContentModel)
    assert excinfo.value.reason is BindingFailureReason.UNSUPPORTED_CONVERSION
    assert excinfo.value.source_type is ForeignContentModel


# -----------------------------
# Failure observers
# -----------------------------

def test_observers_notified_once_and_may_extend_message() -> None:
    seen: List[ModelBindingArgs] = []

    def observer(sender: Any, args: ModelBindingArgs) -> None:
        seen.append(args)
        args.message.write(" Check the view model.")

    binder = ContentModelBinder([observer])
    with pytest.raises(ModelBindingError) as excinfo:
        binder.resolve(NonContentModel(), ContentModel)

    assert len(seen) == 1
    assert seen[0].source_type is NonContentModel
    assert seen[0].model_type is ContentModel
    assert excinfo.value.message.endswith(" Check the view model.")
    assert excinfo.value.restart is False


def test_observer_restart_flag_is_carried_on_error() -> None:
    def request_restart(sender: Any, args: ModelBindingArgs) -> None:
        args.restart = True

    binder = ContentModelBinder()
    binder.model_binding_failed.subscribe(request_restart)
    with pytest.raises(ModelBindingError) as excinfo:
        binder.resolve("Hello", PublishedContent)
    assert excinfo.value.restart is True


def test_failing_observer_does_not_suppress_failure() -> None:
    calls: List[str] = []

    def broken(sender: Any, args: ModelBindingArgs) -> None:
        calls.append("broken")
        raise RuntimeError("observer failed")

    def after(sender: Any, args: ModelBindingArgs) -> None:
        calls.append("after")

    binder = ContentModelBinder([broken, after])
    with pytest.raises(ModelBindingError):
        binder.resolve(NonContentModel(), ContentModel)
    assert calls == ["broken", "after"]


def test_observers_not_notified_on_success() -> None:
    seen: List[ModelBindingArgs] = []
    binder = ContentModelBinder([lambda sender, args: seen.append(args)])
    binder.resolve(_published_content(), ContentModel)
    assert seen == []


def test_stale_model_observer_requests_restart() -> None:
    # Same module and qualified name as ContentType1, but a different class
    reloaded = type(
        "ContentType1",
        (PublishedContentWrapped,),
        {"__module__": ContentType1.__module__, "__qualname__": ContentType1.__qualname__},
    )
    binder = ContentModelBinder([stale_model_observer])

    with pytest.raises(ModelBindingError) as excinfo:
        binder.resolve(reloaded(_node()), ContentModel[ContentType1])

    assert excinfo.value.restart is True
    assert "out of date" in excinfo.value.message
