"""Correlation query catalog tests."""

from __future__ import annotations

from org_metadata_correlator.correlation import (
    entity_definition_query,
    flow_definitions_query,
    flow_versions_query,
    parse_object_api_name,
)


def test_package_prefix_requires_three_segments() -> None:
    assert parse_object_api_name("ns__Invoice__c").package == "ns"
    assert parse_object_api_name("Invoice__c").package == ""
    assert parse_object_api_name("Account").package == ""
    assert parse_object_api_name("a__b__c__d").package == ""


def test_unpackaged_object_is_restricted_to_first_party_publishers() -> None:
    statement = entity_definition_query(parse_object_api_name("Account")).statement

    assert (
        "WHERE QualifiedApiName = 'Account' AND PublisherId IN ('System', '<local>')"
        in statement
    )
    assert "NamespacePrefix =" not in statement


def test_packaged_object_is_restricted_to_its_namespace() -> None:
    statement = entity_definition_query(parse_object_api_name("ns__Invoice__c")).statement

    assert statement.endswith(
        "WHERE QualifiedApiName = 'ns__Invoice__c' AND NamespacePrefix = 'ns'"
    )
    assert "PublisherId" not in statement


def test_entity_definition_query_requests_every_sub_resource() -> None:
    descriptor = entity_definition_query(parse_object_api_name("Account"))

    assert [subquery.relationship for subquery in descriptor.subqueries] == [
        "Fields",
        "ApexTriggers",
        "FieldSets",
        "Layouts",
        "Limits",
        "ValidationRules",
        "WebLinks",
    ]
    assert descriptor.tooling is True
    assert descriptor.query_more is False


def test_flow_queries_target_tooling_surface() -> None:
    definitions = flow_definitions_query()
    versions = flow_versions_query()

    assert definitions.tooling and versions.tooling
    assert "ActiveVersionId" in definitions.fields
    assert "LatestVersionId" in definitions.fields
    assert versions.statement == (
        "SELECT Id, DefinitionId, Status, ProcessType FROM Flow WHERE DefinitionId != null"
    )
