from feedbacker.api.models import AggregateResponse, OutlineResponse, SuggestionGroupOut


def test_model_schemas():
    outline_schema = OutlineResponse.model_json_schema()
    for key in ["topics", "blocks"]:
        assert key in outline_schema["properties"]

    agg_schema = AggregateResponse.model_json_schema()
    for key in ["groups", "raw_suggestions"]:
        assert key in agg_schema["properties"]

    group_schema = SuggestionGroupOut.model_json_schema()
    assert group_schema["properties"]["count"]["minimum"] == 1
