# assistantkit

A small Python client for an Assistants-style HTTP API, built only on the
standard library (Python 3.10 and later). It covers threads, thread messages,
vector stores, models, moderation and text-to-speech, and comes with a reader
for server-sent event streams, a parser for rate-limit headers and a checker
for reasoning-model request parameters.

## Modules

| Module | Contents |
| --- | --- |
| `assistantkit.api` | `ClientConfig`, `Transport`, `APIError`, `RawResponse`, `Pagination` |
| `assistantkit.thread` | `ThreadsAPI`, `ThreadRequest`, `ModifyThreadRequest`, `ThreadMessage`, `ToolResources`, `Thread`, ... |
| `assistantkit.messages` | `MessagesAPI`, `MessageRequest`, `Message`, `MessagesList`, `MessageFile`, ... |
| `assistantkit.vector_store` | `VectorStoresAPI`, `VectorStoreRequest`, `VectorStore`, `VectorStoreFile`, `VectorStoreFileBatch`, ... |
| `assistantkit.models` | `ModelsAPI`, `Model`, `Permission`, `ModelsList`, `FineTuneModelDeleteResponse` |
| `assistantkit.moderation` | `ModerationsAPI`, `ModerationRequest`, `ModerationModel`, `ModerationResponse`, `InvalidModerationModelError` |
| `assistantkit.speech` | `SpeechAPI`, `CreateSpeechRequest`, `SpeechModel`, `SpeechVoice`, `SpeechResponseFormat` |
| `assistantkit.stream_reader` | `StreamReader`, `StreamAPIError`, `TooManyEmptyStreamMessagesError` |
| `assistantkit.ratelimit` | `RateLimitHeaders`, `ResetTime`, `parse_rate_limit_headers`, `parse_duration` |
| `assistantkit.reasoning_validator` | `ReasoningValidator` and the `ReasoningModelError` family |

## Talking to the API

A `ClientConfig` holds the token, the base URL (by default
`https://api.openai.com/v1`), an optional organisation id, the assistants
version, the empty-line limit for streams and a timeout. A `Transport` sends
requests with a `Bearer` authorisation header and, for `/assistants`,
`/threads` and `/vector_stores` paths, an assistants beta header. Each
resource class takes the transport:

```python
from assistantkit.api import ClientConfig, Pagination, Transport
from assistantkit.messages import MessageRequest, MessagesAPI
from assistantkit.thread import ThreadMessage, ThreadMessageRole, ThreadRequest, ThreadsAPI

transport = Transport(ClientConfig(auth_token="placeholder"))

threads = ThreadsAPI(transport)
thread = threads.create(
    ThreadRequest(messages=[ThreadMessage(role=ThreadMessageRole.USER, content="Hello")])
)

messages = MessagesAPI(transport)
messages.create(thread.id, MessageRequest(role="user", content="How does AI work?"))
page = messages.list(thread.id, limit=10, order="desc")
```

Replies are returned as dataclasses. List endpoints of `VectorStoresAPI`
take a `Pagination` with optional `limit`, `order`, `after` and `before`;
options left as `None` are not sent.

An error reply from the server is raised as `APIError`, carrying `message`,
`type`, `param`, `code` and the HTTP `status_code`. `ModerationsAPI.create`
raises `InvalidModerationModelError` before sending anything when the model
is not one of the supported moderation models (the deprecated
`ModerationModel.TEXT_001` included); an empty model leaves the choice to
the server.

`SpeechAPI.create` returns a `RawResponse`, a context manager whose `read()`
gives the audio bytes:

```python
from assistantkit.speech import CreateSpeechRequest, SpeechAPI, SpeechModel, SpeechVoice

with SpeechAPI(transport).create(
    CreateSpeechRequest(model=SpeechModel.TTS_1, input="Hello!", voice=SpeechVoice.ALLOY)
) as audio:
    data = audio.read()
```

## Streaming

`Transport.stream(method, path, body)` sends a request and returns a
`StreamReader` over the reply. A `StreamReader` can also wrap any object
with `readline()` and `close()`:

```python
import io

from assistantkit.stream_reader import StreamReader

source = io.BytesIO(b'event: message\ndata: {"id": "1"}\n\ndata: [DONE]\n\n')
with StreamReader(source) as stream:
    for event in stream:
        print(event["id"])
```

`recv()` returns the next decoded event and raises `EOFError` at the
`[DONE]` marker or when the stream ends; `recv_raw()` returns the payload
bytes undecoded; iteration stops quietly at the end. An error document sent
in place of events is raised as `StreamAPIError`, and more consecutive
non-data lines than the limit (300 by default) raise
`TooManyEmptyStreamMessagesError`.

## Rate limits

After each request `Transport.last_headers` holds the reply headers:

```python
from assistantkit.ratelimit import parse_rate_limit_headers

limits = parse_rate_limit_headers({
    "x-ratelimit-limit-requests": "60",
    "x-ratelimit-remaining-requests": "59",
    "x-ratelimit-reset-requests": "1s",
})
print(limits.remaining_requests, limits.reset_requests.time())
```

Missing or malformed numbers become 0; a reset interval that cannot be
parsed counts as zero. `parse_duration("1h2m3.5s")` returns a `timedelta`
and raises `ValueError` on bad input.

## Reasoning-model checks

`ReasoningValidator().validate(request)` accepts a mapping or an object with
chat request attributes. For models whose name starts with `o1`, `o3`, `o4`
or `gpt-5` it raises `MaxTokensDeprecatedError` when `max_tokens` is set,
`LogprobsUnsupportedError` when `logprobs` is requested, and
`FixedParameterError` when `temperature`, `top_p` or `n` differ from 1 or a
presence or frequency penalty is positive. Other models pass unchecked.

## What it does not do

There are no calls for runs or run steps, no chat or text completion calls,
and no JSON Schema generation or validation; the `assistantkit.jsonschema`
sub-package contains no modules. The package is a library only and has no
command-line program.

## Running the tests

The tests use pytest, available through the `test` extra:

```
pip install -e ".[test]"
pytest
```