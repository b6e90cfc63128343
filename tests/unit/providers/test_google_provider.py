from chatbridge.providers.google import GoogleProvider, camelize_keys
from chatbridge.schemas import GoogleGenerateRequest
from chatbridge.streaming.framing import StreamSignal
from chatbridge.validation import validate


def replay(provider, events):
    accumulator = None
    for event in events:
        accumulator = provider.merge_event(accumulator, event)
    return accumulator


def candidate(text, index=None, **extra):
    item = {"content": {"role": "model", "parts": [{"text": text}]}, **extra}
    if index is not None:
        item["index"] = index
    return item


class TestGoogleProviderConfig:
    def test_headers(self):
        assert GoogleProvider({"api_key": "gk"}).request_headers() == {
            "content-type": "application/json",
            "x-goog-api-key": "gk",
        }

    def test_endpoints_embed_model(self):
        provider = GoogleProvider({})
        options = {"model": "gemini-1.5-flash"}
        assert provider.resolve_endpoint(options) == ("/models/gemini-1.5-flash:generateContent", {})
        assert provider.resolve_stream_endpoint(options) == (
            "/models/gemini-1.5-flash:streamGenerateContent?alt=sse", {}
        )
        assert provider.schema() is GoogleGenerateRequest

    def test_build_body_renames_and_camelizes(self):
        options = validate({
            "model": "gemini-1.5-flash",
            "contents": [{"role": "user", "parts": [{"inline_data": {"mime_type": "image/png", "data": "AAAA"}}]}],
            "system": {"text": "Be brief"},
            "generation": {"max_output_tokens": 64, "candidate_count": 2},
            "safety": [{"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_NONE"}],
            "tool_config": {"function_calling_config": {"mode": "AUTO"}},
        }, GoogleGenerateRequest)

        body = GoogleProvider({}).build_body(options)

        assert "model" not in body
        assert body["contents"][0]["parts"][0] == {"inlineData": {"mimeType": "image/png", "data": "AAAA"}}
        assert body["systemInstruction"] == {"text": "Be brief"}
        assert body["generationConfig"] == {"maxOutputTokens": 64, "candidateCount": 2}
        assert body["safetySettings"] == [{"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_NONE"}]
        assert body["toolConfig"] == {"functionCallingConfig": {"mode": "AUTO"}}

    def test_function_parameters_sent_verbatim(self):
        body = camelize_keys({"function_declarations": [
            {"name": "f", "parameters": {"properties": {"city_name": {"type": "string"}}}}
        ]})
        assert body == {"functionDeclarations": [
            {"name": "f", "parameters": {"properties": {"city_name": {"type": "string"}}}}
        ]}


class TestGoogleChunkParser:
    def setup_method(self):
        self.provider = GoogleProvider({})

    def test_blank_line_terminators(self):
        data = 'data: {"a":1}\r\n\r\ndata: {"a":2}\n\ndata: {"a":3}\r\r'
        parsed = self.provider.parse_chunk(data)
        assert parsed.events == [{"a": 1}, {"a": 2}, {"a": 3}]
        assert parsed.signal is StreamSignal.CONTINUE

    def test_unterminated_frame_is_remainder(self):
        parsed = self.provider.parse_chunk('data: {"a":1}\r\n\r\ndata: {"a":2}')
        assert parsed.events == [{"a": 1}]
        assert parsed.remainder == 'data: {"a":2}'


class TestGoogleMerge:
    def setup_method(self):
        self.provider = GoogleProvider({})

    def test_parts_text_concatenated(self):
        events = [
            {"candidates": [candidate("Mo", index=0)]},
            {"candidates": [candidate("unt Oly", index=0)]},
            {"candidates": [candidate("mpus", index=0, finishReason="STOP")], "usageMetadata": {"totalTokenCount": 9}},
        ]
        merged = replay(self.provider, events)
        assert merged == {
            "candidates": [{
                "content": {"role": "model", "parts": [{"text": "Mount Olympus"}]},
                "index": 0,
                "finishReason": "STOP",
            }],
            "usageMetadata": {"totalTokenCount": 9},
        }

    def test_missing_index_treated_as_zero(self):
        events = [{"candidates": [candidate("Hel")]}, {"candidates": [candidate("lo")]}]
        merged = replay(self.provider, events)
        assert len(merged["candidates"]) == 1
        assert merged["candidates"][0]["content"]["parts"] == [{"text": "Hello"}]

    def test_out_of_order_candidates(self):
        events = [{"candidates": [candidate(str(i), index=i)]} for i in (1, 0)]
        merged = replay(self.provider, events)
        assert [c["index"] for c in merged["candidates"]] == [0, 1]

    def test_function_call_part_appended(self):
        call = {"functionCall": {"name": "weather", "args": {"city": "Athens"}}}
        events = [
            {"candidates": [candidate("Checking", index=0)]},
            {"candidates": [{"content": {"role": "model", "parts": [call]}, "index": 0}]},
        ]
        parts = replay(self.provider, events)["candidates"][0]["content"]["parts"]
        assert parts == [{"text": "Checking"}, call]

    def test_thought_signature_kept_on_collision(self):
        events = [
            {"candidates": [{"content": {"role": "model", "parts": [{"text": "Hello"}]}, "index": 0}]},
            {"candidates": [{"content": {"role": "model", "parts": [{"text": " world", "thoughtSignature": "sig"}]}, "index": 0}]},
        ]
        parts = replay(self.provider, events)["candidates"][0]["content"]["parts"]
        assert parts == [{"text": "Hello world", "thoughtSignature": "sig"}]
