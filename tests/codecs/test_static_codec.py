"""Tests for StaticClassCodec and the ClassCodec/JsonCodecable protocols."""

from __future__ import annotations

from samples import Cat, Dog, Holder, ManagedObjectFactory, Plain, SampleObject, TaggedValue

from json_typed_codec import ClassCodec, CodecFactory, JsonCodec, JsonCodecable, list_of
from json_typed_codec.codecs import STATIC_CLASS_CODEC, StaticClassCodec, static_class_codec


class TestStaticClassCodec:
    def test_to_record(self) -> None:
        assert STATIC_CLASS_CODEC.to_record(SampleObject("x")) == {"property": "x"}

    def test_from_record(self) -> None:
        assert STATIC_CLASS_CODEC.from_record(SampleObject, {"property": "x"}) == SampleObject("x")

    def test_hint_for(self) -> None:
        assert STATIC_CLASS_CODEC.hint_for(Holder, "items") == list_of(SampleObject)
        assert STATIC_CLASS_CODEC.hint_for(Holder, "extra") is None
        assert STATIC_CLASS_CODEC.hint_for(Cat, "enemy") is Dog

    def test_hint_for_without_hook(self) -> None:
        assert STATIC_CLASS_CODEC.hint_for(SampleObject, "property") is None

    def test_shared_instance(self) -> None:
        assert static_class_codec() is STATIC_CLASS_CODEC
        assert isinstance(STATIC_CLASS_CODEC, StaticClassCodec)

    def test_selected_for_codecable_classes(self) -> None:
        assert JsonCodec().codec_for(SampleObject) is STATIC_CLASS_CODEC


class TestProtocols:
    def test_codec_protocol(self) -> None:
        assert isinstance(STATIC_CLASS_CODEC, ClassCodec)
        assert isinstance(ManagedObjectFactory(), ClassCodec)

    def test_codecable_protocol(self) -> None:
        assert isinstance(SampleObject("x"), JsonCodecable)
        assert not isinstance(Plain(), JsonCodecable)

    def test_factory_protocol(self) -> None:
        assert isinstance(TaggedValue, CodecFactory)
        assert not isinstance(SampleObject, CodecFactory)
