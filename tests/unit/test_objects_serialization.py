"""Tests for the typed object runtime."""
import pytest
from datetime import datetime, timezone

from kalturapy.core.exceptions import TypeMismatchError, UnknownTypeError
from kalturapy.core.objects import (
    KalturaObjectBase,
    KalturaTypesFactory,
    DependentProperty,
    PropertyType,
    UNSET,
    prop,
    create_kaltura_object
)
from kalturapy.types import (
    KalturaBaseEntry,
    KalturaClipAttributes,
    KalturaListResponse,
    KalturaMediaEntry,
    KalturaMediaListResponse,
    KalturaStringValue,
    KalturaUploadToken,
    MediaGetAction,
    MediaType
)


class TestPropertyMetadata:
    """Test suite for metadata tables."""

    def test_metadata_merges_base_classes(self):
        """Test subclass table includes base class properties."""
        metadata = KalturaMediaEntry.get_metadata()

        assert 'name' in metadata
        assert 'mediaType' in metadata
        assert 'relatedObjects' in metadata

    def test_subclass_overrides_discriminator(self):
        """Test own objectType constant replaces the base one."""
        assert KalturaMediaEntry().get_type_name() == 'KalturaMediaEntry'
        assert KalturaBaseEntry().get_type_name() == 'KalturaBaseEntry'

    def test_metadata_is_read_only(self):
        """Test metadata table cannot be modified."""
        with pytest.raises(TypeError):
            KalturaMediaEntry.get_metadata()['name'] = None

    def test_attribute_names_are_snake_case(self):
        """Test wire names map to snake_case attributes."""
        assert KalturaMediaEntry.get_metadata()['mediaType'].attribute == 'media_type'

    def test_unset_fields(self):
        """Test unassigned fields hold UNSET."""
        entry = KalturaMediaEntry()

        assert entry.name is UNSET
        assert not entry.name

    def test_unknown_keyword_raises(self):
        """Test unknown constructor keyword raises TypeError."""
        with pytest.raises(TypeError):
            KalturaMediaEntry(colour='red')


class TestToRequestObject:
    """Test suite for serialization to the wire record."""

    def test_simple_entry(self):
        """Test scalar properties and discriminator."""
        entry = KalturaMediaEntry(name='clip', media_type=MediaType.VIDEO)

        assert entry.to_request_object() == {
            'objectType': 'KalturaMediaEntry',
            'name': 'clip',
            'mediaType': 1,
        }

    def test_read_only_properties_skipped(self):
        """Test read-only values are never sent."""
        entry = KalturaMediaEntry(name='clip')
        entry.id = '0_abc'

        assert 'id' not in entry.to_request_object()

    def test_deletion_marker(self):
        """Test None sends the null marker."""
        entry = KalturaMediaEntry(description=None)

        result = entry.to_request_object()

        assert result['description__null'] == ''
        assert 'description' not in result

    def test_numeric_strings(self):
        """Test numeric strings are cast."""
        result = KalturaUploadToken(file_size='1024').to_request_object()

        assert result['fileSize'] == 1024

    def test_non_numeric_raises(self):
        """Test non-numeric value of number property."""
        entry = KalturaMediaEntry(media_type='video')

        with pytest.raises(TypeMismatchError) as exc_info:
            entry.to_request_object()

        assert exc_info.value.code == 'client::type-mismatch'

    def test_empty_array_omitted(self):
        """Test empty array is missing by default."""
        entry = KalturaMediaEntry(name='clip', operation_attributes=[])

        assert 'operationAttributes' not in entry.to_request_object()

    def test_empty_array_allowed(self):
        """Test allow-listed empty array is sent."""
        entry = KalturaMediaEntry(name='clip', operation_attributes=[])
        entry.allow_empty_array('operationAttributes')

        assert entry.to_request_object()['operationAttributes'] == []

    def test_allow_empty_array_ignores_non_arrays(self):
        """Test allow-list ignores unknown and non-array names."""
        entry = KalturaMediaEntry(operation_attributes=[])
        result = entry.allow_empty_array('name', 'doesNotExist')

        assert result is entry
        assert 'operationAttributes' not in entry.to_request_object()

    def test_array_of_objects(self):
        """Test arrays serialize each element."""
        entry = KalturaMediaEntry(
            operation_attributes=[KalturaClipAttributes(offset=1000, duration=5000)]
        )

        assert entry.to_request_object()['operationAttributes'] == [
            {'objectType': 'KalturaClipAttributes', 'offset': 1000, 'duration': 5000}
        ]

    def test_array_with_plain_values_raises(self):
        """Test array elements must be typed objects."""
        entry = KalturaMediaEntry(operation_attributes=[{'offset': 1}])

        with pytest.raises(TypeMismatchError):
            entry.to_request_object()

    def test_map_of_objects(self):
        """Test maps serialize each value."""
        entry = KalturaMediaEntry(metas={'lang': KalturaStringValue(value='en')})

        assert entry.to_request_object()['metas'] == {
            'lang': {'objectType': 'KalturaStringValue', 'value': 'en'}
        }

    def test_empty_map_omitted(self):
        """Test empty map is missing."""
        entry = KalturaMediaEntry(metas={})

        assert 'metas' not in entry.to_request_object()

    def test_date_as_unix_seconds(self):
        """Test dates are sent as integer seconds."""
        entry = KalturaMediaEntry(start_date=datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc))

        assert entry.to_request_object()['startDate'] == 1700000000

    def test_naive_date_sent_as_utc(self):
        """Test naive dates are read as UTC and come back as the same instant."""
        naive = datetime(2024, 1, 2, 3, 4, 5)
        wire = KalturaMediaEntry(start_date=naive).to_request_object()

        assert wire['startDate'] == 1704164645

        parsed = KalturaMediaEntry().from_response_object(wire)

        assert parsed.start_date == naive.replace(tzinfo=timezone.utc)
        assert parsed.to_request_object()['startDate'] == wire['startDate']

    def test_date_requires_datetime(self):
        """Test non-date value of date property."""
        entry = KalturaMediaEntry(start_date='yesterday')

        with pytest.raises(TypeMismatchError):
            entry.to_request_object()

    def test_action_parameters(self):
        """Test actions serialize service, action and parameters."""
        action = MediaGetAction()
        action.entry_id = '0_abc'

        assert action.to_request_object() == {
            'service': 'media',
            'action': 'get',
            'entryId': '0_abc',
        }

    def test_constant_ignores_instance_value(self):
        """Test constants always send their default."""
        entry = KalturaMediaEntry(name='clip')
        entry.object_type = 'SomethingElse'

        assert entry.to_request_object()['objectType'] == 'KalturaMediaEntry'


class TestDependencies:
    """Test suite for dependent properties."""

    def test_placeholder_is_one_based(self):
        """Test request index is shifted by one."""
        action = MediaGetAction().set_dependency(('entryId', 0, 'id'))

        assert action.to_request_object()['entryId'] == '{1:result:id}'

    def test_placeholder_without_path(self):
        """Test placeholder referencing the whole result."""
        action = MediaGetAction().set_dependency(('entryId', 2))

        assert action.to_request_object()['entryId'] == '{3:result}'

    def test_sequence_path_joined(self):
        """Test sequence target path uses ':' separators."""
        action = MediaGetAction().set_dependency(
            DependentProperty('entryId', 0, ['objects', '0', 'id'])
        )

        assert action.to_request_object()['entryId'] == '{1:result:objects:0:id}'

    def test_dependency_overrides_value(self):
        """Test dependency wins over a literal value."""
        action = MediaGetAction(entry_id='0_literal').set_dependency(('entryId', 0, 'id'))

        assert action.to_request_object()['entryId'] == '{1:result:id}'

    def test_dependency_overrides_read_only(self):
        """Test dependency is sent even for read-only properties."""
        entry = KalturaMediaEntry().set_dependency(('id', 1, 'id'))

        assert entry.to_request_object()['id'] == '{2:result:id}'

    def test_dependency_on_constant_ignored(self):
        """Test constants cannot be bound."""
        action = MediaGetAction().set_dependency(('service', 0))

        assert action.to_request_object()['service'] == 'media'
        assert 'service' not in action.dependent_properties

    def test_last_binding_wins(self):
        """Test binding the same property twice."""
        action = MediaGetAction().set_dependency(('entryId', 0, 'id'), ('entryId', 1, 'id'))

        assert action.to_request_object()['entryId'] == '{2:result:id}'

    def test_attribute_name_resolves_to_wire_name(self):
        """Test bindings may use the python attribute name."""
        action = MediaGetAction().set_dependency(('entry_id', 0, 'id'))

        assert 'entryId' in action.dependent_properties


class TestFromResponseObject:
    """Test suite for parsing server records."""

    def test_round_trip(self, sample_entry_data):
        """Test parsing a full entry."""
        entry = KalturaMediaEntry().from_response_object(sample_entry_data)

        assert entry.id == '0_abc123'
        assert entry.name == 'clip'
        assert entry.partner_id == 102
        assert entry.media_type == MediaType.VIDEO
        assert entry.created_at == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
        assert isinstance(entry.operation_attributes[0], KalturaClipAttributes)
        assert entry.operation_attributes[0].duration == 5000
        assert entry.metas['lang'].value == 'en'

    def test_serialize_then_parse(self):
        """Test writable fields survive a round trip."""
        original = KalturaMediaEntry(
            name='clip',
            description='a clip',
            media_type=MediaType.AUDIO,
            operation_attributes=[KalturaClipAttributes(offset=0, duration=10)]
        )

        parsed = KalturaMediaEntry().from_response_object(original.to_request_object())

        assert parsed == original

    def test_absent_keys_untouched(self):
        """Test fields missing from the record keep their value."""
        entry = KalturaMediaEntry(name='keep')
        entry.from_response_object({'objectType': 'KalturaMediaEntry', 'description': 'x'})

        assert entry.name == 'keep'
        assert entry.description == 'x'

    def test_null_clears_field(self):
        """Test null values set the field to None."""
        entry = KalturaMediaEntry(name='clip')
        entry.from_response_object({'name': None})

        assert entry.name is None

    def test_bool_parsing(self):
        """Test boolean coercions."""
        meta = prop('flag', PropertyType.BOOL)

        class Flagged(KalturaObjectBase):
            _properties = (meta,)

        assert Flagged().from_response_object({'flag': '1'}).flag is True
        assert Flagged().from_response_object({'flag': 0}).flag is False
        assert Flagged().from_response_object({'flag': 'maybe'}).flag is UNSET

    def test_unknown_discriminator_falls_back(self):
        """Test unknown objectType uses the declared sub type."""
        entry = KalturaMediaEntry().from_response_object({
            'operationAttributes': [{'objectType': 'KalturaFutureAttributes', 'offset': 1}]
        })

        assert type(entry.operation_attributes[0]).__name__ == 'KalturaOperationAttributes'

    def test_subclass_discriminator_wins(self):
        """Test concrete objectType is preferred to the declared sub type."""
        response = KalturaListResponse().from_response_object({
            'relatedObjects': {'media': {'objectType': 'KalturaMediaListResponse', 'totalCount': 1}}
        })

        assert isinstance(response.related_objects['media'], KalturaMediaListResponse)

    def test_unresolvable_type_raises(self):
        """Test nothing resolves."""
        with pytest.raises(UnknownTypeError) as exc_info:
            create_kaltura_object('KalturaNope', 'KalturaAlsoNope')

        assert exc_info.value.code == 'client::unknown-type'

    def test_no_partial_objects(self):
        """Test a failing property leaves the object untouched."""
        entry = KalturaMediaEntry(name='before')

        with pytest.raises(TypeMismatchError):
            entry.from_response_object({'name': 'after', 'partnerId': 'not-a-number'})

        assert entry.name == 'before'
        assert entry.partner_id is UNSET

    def test_non_mapping_raises(self):
        """Test parsing a list as an object."""
        with pytest.raises(TypeMismatchError):
            KalturaMediaEntry().from_response_object(['a'])

    def test_wrong_container_shape(self):
        """Test array property given an object."""
        with pytest.raises(TypeMismatchError):
            KalturaMediaListResponse().from_response_object({'objects': {'a': 1}})


class TestTypesFactory:
    """Test suite for KalturaTypesFactory."""

    def test_bundled_types_registered(self):
        """Test importing types registers them."""
        assert KalturaTypesFactory.is_registered('KalturaMediaEntry')
        assert KalturaTypesFactory.is_registered('KalturaListResponse')

    def test_create_object(self):
        """Test creating by discriminator."""
        assert isinstance(KalturaTypesFactory.create_object('KalturaUploadToken'), KalturaUploadToken)

    def test_unknown_returns_none(self):
        """Test unknown discriminator."""
        assert KalturaTypesFactory.create_object('KalturaUnknown') is None
        assert KalturaTypesFactory.create_object(None) is None

    def test_register_and_unregister(self):
        """Test custom registration."""

        class KalturaCustom(KalturaObjectBase):
            _properties = (prop('objectType', PropertyType.CONSTANT, default='KalturaCustom'),)

        KalturaTypesFactory.register('KalturaCustom', KalturaCustom)
        try:
            assert isinstance(create_kaltura_object('KalturaCustom'), KalturaCustom)
        finally:
            KalturaTypesFactory.unregister('KalturaCustom')

        assert not KalturaTypesFactory.is_registered('KalturaCustom')


class TestEquality:
    """Test suite for structural equality."""

    def test_equal_objects(self):
        """Test same type and values."""
        assert KalturaMediaEntry(name='a') == KalturaMediaEntry(name='a')

    def test_different_values(self):
        """Test different values."""
        assert KalturaMediaEntry(name='a') != KalturaMediaEntry(name='b')

    def test_different_types(self):
        """Test same values, different types."""
        assert KalturaBaseEntry(name='a') != KalturaMediaEntry(name='a')

    def test_unhashable(self):
        """Test mutable objects are unhashable."""
        with pytest.raises(TypeError):
            hash(KalturaMediaEntry())
