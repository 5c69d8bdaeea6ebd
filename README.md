# oaiclient

Building blocks for talking to an assistants-style chat API from Python.
The package uses only the standard library.

## Resources

Each resource class takes a transport and returns dataclasses built from
the server's JSON replies:

| Module | Class | Calls |
| --- | --- | --- |
| `oaiclient.thread` | `Threads` | `create`, `retrieve`, `modify`, `delete` |
| `oaiclient.messages` | `Messages` | `create`, `list`, `retrieve`, `modify`, `retrieve_file`, `list_files`, `delete` |
| `oaiclient.run` | `Runs` | `create`, `retrieve`, `modify`, `list`, `submit_tool_outputs`, `cancel`, `create_thread_and_run`, `retrieve_step`, `list_steps` |
| `oaiclient.vector_store` | `VectorStores` | `create`, `retrieve`, `modify`, `delete`, `list`, `create_file`, `retrieve_file`, `delete_file`, `list_files`, `create_file_batch`, `retrieve_file_batch`, `cancel_file_batch`, `list_files_in_batch` |
| `oaiclient.models` | `Models` | `list`, `get`, `delete_fine_tune` |
| `oaiclient.moderation` | `Moderations` | `create` |
| `oaiclient.speech` | `Speech` | `create` (returns the audio bytes) |

The transport is `oaiclient.pagination.Transport`. It sends JSON with
`urllib`, adds a bearer `Authorization` header, an `OpenAI-Organization`
header when an organization is given, and an `OpenAI-Beta` header for the
assistants endpoints. `Transport.request` returns the decoded JSON reply
(or `None` for an empty body); `Transport.request_raw` returns the body
unchanged. Error statuses raise `urllib.error.HTTPError`.

```python
from oaiclient.pagination import Pagination, Transport
from oaiclient.thread import ThreadMessage, ThreadMessageRole, ThreadRequest, Threads
from oaiclient.run import RunRequest, Runs

transport = Transport(api_key="placeholder")
thread = Threads(transport).create(
    ThreadRequest(messages=[ThreadMessage(ThreadMessageRole.USER, "Hello, World!")])
)
run = Runs(transport).create(thread.id, RunRequest(assistant_id="asst_abc123"))
runs = Runs(transport).list(thread.id, Pagination(limit=20, order="desc"))
```

List endpoints take a `Pagination` (`limit`, `order`, `after`, `before`);
options left as `None` are not sent. `encode_query()` sorts the parameters
by key and returns `"?k=v&..."`, or `""` when there are none.

`Moderations.create` raises `InvalidModerationModelError` when the model
is set and is not one of the moderation models listed in
`VALID_MODERATION_MODELS`.

## Streaming

`oaiclient.stream_reader.StreamReader` reads server-sent events from a
binary file-like object line by line. `recv_raw()` returns the payload of
the next `data:` line, `recv()` returns it decoded (with `json.loads` by
default). `data: [DONE]` or the end of input raises `EOFError`; iterating
the reader simply stops there. It is also a context manager that closes
its source.

More non-data lines in a row than `empty_messages_limit` (300 by default)
raise `TooManyEmptyStreamMessagesError`. An error object sent by the
server in the stream raises `StreamAPIError`, with `message`, `type`,
`param` and `code`.

```python
import io

from oaiclient.stream_reader import StreamReader

body = io.BytesIO(b'data: {"id": "1"}\n\ndata: [DONE]\n\n')
with StreamReader(body) as stream:
    for event in stream:
        print(event)          # {'id': '1'}
```

## Rate limits

`oaiclient.ratelimit.RateLimitHeaders.from_headers(headers)` reads the
`x-ratelimit-*` headers of a response; missing or malformed numbers give
0. `ResetTime.time()` turns a reset interval such as `"6m0s"` into a UTC
`datetime` counted from now.

## Reasoning-model checks

`oaiclient.reasoning.ReasoningValidator().validate(request)` takes a
mapping or an object with chat request fields. For models whose names
start with `o1`, `o3`, `o4` or `gpt-5` it raises
`ReasoningModelMaxTokensError` when `max_tokens` is set,
`ReasoningModelLogprobsError` when `logprobs` is set, and
`ReasoningModelLimitationsError` when `temperature`, `top_p` or `n` is
other than 1, or a presence or frequency penalty is above 0. All three
derive from `ReasoningModelError`.

## JSON schema

`oaiclient.jsonschema.definition.Definition` describes a small subset of
JSON Schema (`type`, `description`, `enum`, `properties`, `required`,
`items`, `additionalProperties`, `nullable`, `$ref`, `$defs`), with
`to_dict`, `from_dict`, `to_json` and `unmarshal`.
`oaiclient.jsonschema.validate` offers `validate()`, `collect_defs()` and
`verify_schema_and_unmarshal()`.

```python
from oaiclient.jsonschema.definition import Definition
from oaiclient.jsonschema.validate import validate, verify_schema_and_unmarshal

schema = Definition.from_dict({
    "type": "object",
    "properties": {"name": {"type": "string"}},
    "required": ["name"],
})

validate(schema, {"name": "foo"})                        # True
validate(schema, {"name": 1})                            # False
verify_schema_and_unmarshal(schema, '{"name": "foo"}')   # {'name': 'foo'}
```

`verify_schema_and_unmarshal` raises `json.JSONDecodeError` for malformed
input and `SchemaValidationError` when the document does not match.

## What the package does not do

- It does not build schemas from Python types; definitions are written by
  hand or read with `Definition.from_dict`.
- It has no call that creates chat or text completions, and so nothing
  that opens a completion stream: `StreamReader` reads a stream you
  already have.
- It has no file upload, audio transcription or translation calls.
- There is no single client object and no command-line tool; you build a
  `Transport` and the resource classes you need.

## Running the tests

```
pip install -e ".[test]"
pytest
```