import dotenv

from langchain_sse_replay import parse_sse_stream
from langchain_sse_replay.report import render_report

dotenv.load_dotenv()

transcript = """\
event: message_start
data: {"type":"message_start","message":{"id":"msg_1","model":"claude-3-5-haiku-latest","content":[]}}

event: content_block_delta
data: {"type":"content_block_delta","index":0,"delta":{"type":"text_delta","text":"Hola"}}

event: content_block_delta
data: {"type":"content_block_delta","index":0,"delta":{"type":"text_delta","text":", mundo"}}

event: message_delta
data: {"type":"message_delta","delta":{"stop_reason":"end_turn"}}

event: message_stop
data: {"type":"message_stop"}
"""

result = parse_sse_stream(transcript)
print(render_report(result))

msg = result.to_message()
print(repr(msg))
