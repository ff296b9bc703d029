"""
ReelChat — FastAPI Application

Chat page plus the small JSON/SSE API it talks to.
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from sse_starlette.sse import EventSourceResponse

from reelchat import clients
from reelchat.assistant import Assistant, ChatReply
from reelchat.cards import build_cards
from reelchat.config import settings
from reelchat.errors import EmptyQueryError
from reelchat.models import ChatRequest, ChatResponse, SessionContext, SpeechToggle
from reelchat.sessions import (
    cleanup_expired,
    delete_session,
    get_or_create_session,
    get_session,
)

logger = logging.getLogger(__name__)

assistant = Assistant()


# ── Lifespan: startup/shutdown ────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down shared resources."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    )
    logger.info("ReelChat starting up…")
    logger.info("   webhook: %s", settings.webhook_url)

    yield  # app runs here

    logger.info("ReelChat shutting down…")
    await clients.close_client()


# ── App instance ──────────────────────────────────────────

app = FastAPI(
    title="ReelChat",
    version="1.0.0",
    description="Chat-style movie and series recommendations",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    t0 = time.perf_counter()
    response = await call_next(request)
    elapsed = (time.perf_counter() - t0) * 1000
    logger.info(
        "%s %s → %d (%.0f ms)",
        request.method,
        request.url.path,
        response.status_code,
        elapsed,
    )
    return response


# ── Helpers ───────────────────────────────────────────────


def _to_response(session: SessionContext, result: ChatReply) -> ChatResponse:
    return ChatResponse(
        session_id=session.session_id,
        reply=result.reply,
        outcome=result.outcome,
        recommendations=build_cards(session.recommendations or []),
        turns=session.turns,
    )


async def _run_chat(body: ChatRequest) -> ChatResponse:
    if not body.query.strip():
        raise HTTPException(status_code=422, detail="Query must not be empty")

    session = get_or_create_session(body.session_id)
    try:
        result = await assistant.submit(session, body.query)
    except EmptyQueryError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except Exception:
        logger.exception("Chat turn failed")
        raise HTTPException(status_code=500, detail="The chat turn could not be completed")
    return _to_response(session, result)


# ── Health endpoint ───────────────────────────────────────


@app.get("/api/health")
async def health():
    return {"status": "ok", "webhook": settings.webhook_host}


# ── Chat endpoints ────────────────────────────────────────


@app.post("/api/chat", response_model=ChatResponse)
async def chat(body: ChatRequest):
    """
    Send one chat message.

    The reply is always a normal 200 response: webhook failures and empty
    results are reported as assistant turns, not HTTP errors.
    """
    return await _run_chat(body)


@app.post("/api/chat/stream")
async def chat_stream(body: ChatRequest):
    """Same as /api/chat, as Server-Sent Events with a 'thinking' phase first."""
    if not body.query.strip():
        raise HTTPException(status_code=422, detail="Query must not be empty")

    async def event_generator() -> AsyncIterator[dict]:
        yield {"event": "status", "data": json.dumps({"phase": "thinking"})}
        response = await _run_chat(body)
        yield {"event": "reply", "data": response.model_dump_json()}
        yield {"event": "done", "data": json.dumps({"session_id": response.session_id})}

    return EventSourceResponse(event_generator())


# ── Session endpoints ─────────────────────────────────────


@app.get("/api/session/{session_id}")
async def get_session_info(session_id: str):
    """Retrieve session history."""
    ctx = get_session(session_id)
    if not ctx:
        raise HTTPException(status_code=404, detail="Session not found")
    return ctx


@app.delete("/api/session/{session_id}")
async def delete_session_endpoint(session_id: str):
    if not delete_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"status": "deleted"}


@app.put("/api/session/{session_id}/speech")
async def toggle_speech(session_id: str, body: SpeechToggle):
    """Turn read-aloud of assistant replies on or off."""
    ctx = get_session(session_id)
    if not ctx:
        raise HTTPException(status_code=404, detail="Session not found")
    ctx.speech_enabled = body.enabled
    if not body.enabled:
        assistant.voice_output.cancel()
    return {"session_id": session_id, "speech_enabled": ctx.speech_enabled}


@app.post("/api/sessions/cleanup")
async def cleanup_sessions():
    """Remove idle sessions."""
    return {"removed": cleanup_expired()}


# ── Chat page ─────────────────────────────────────────────


@app.get("/", response_class=HTMLResponse)
async def root():
    return HTMLResponse(content=_PAGE)


_PAGE = """<!DOCTYPE html>
<html><head><meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>ReelChat</title>
<style>
body{font-family:system-ui;background:#0b0c15;color:#e2e8f0;margin:0;display:flex;height:100vh}
#chat{width:400px;display:flex;flex-direction:column;background:#11121c;border-right:1px solid #ffffff10}
#log{flex:1;overflow-y:auto;padding:1.5rem}
.msg{margin:.75rem 0;padding:.9rem;border-radius:1rem;max-width:80%;font-size:.9rem;line-height:1.4}
.assistant{background:#1a1b26;color:#cbd5e1}
.user{background:#4f46e5;color:#fff;margin-left:auto}
form{display:flex;gap:.5rem;padding:1.5rem;border-top:1px solid #ffffff10}
input{flex:1;background:#1a1b26;color:#fff;border:1px solid #ffffff10;border-radius:.75rem;padding:.9rem}
button{background:#4f46e5;color:#fff;border:0;border-radius:.5rem;padding:0 .9rem;cursor:pointer}
button:disabled{opacity:.5}
#results{flex:1;overflow-y:auto;padding:2rem}
#grid{display:grid;grid-template-columns:repeat(auto-fill,minmax(220px,1fr));gap:1.5rem}
.card{border-radius:1rem;padding:1.25rem;min-height:300px;display:flex;flex-direction:column;justify-content:flex-end}
.card h3{margin:.25rem 0;cursor:pointer}
.meta{font-size:.75rem;opacity:.9;display:flex;gap:.5rem}
.score{margin-left:auto;color:#a5b4fc;font-weight:bold}
.desc{font-size:.75rem;color:#cbd5e1}
.tag{font-size:.65rem;padding:.2rem .5rem;background:#ffffff10;border-radius:.25rem;margin-right:.25rem}
.badge{align-self:flex-end;font-size:.6rem;text-transform:uppercase;background:#00000066;padding:.2rem .5rem;border-radius:.3rem}
</style></head>
<body>
<div id="chat">
  <div style="padding:1.5rem;font-weight:bold;color:#818cf8">AI Movie/TV Series Recommender</div>
  <div id="log"></div>
  <form id="form">
    <input id="q" placeholder="Find me a sci-fi movie..." autocomplete="off">
    <button type="button" id="mic" title="Speak">&#127908;</button>
    <button type="button" id="tts" title="Read replies aloud">&#128264;</button>
    <button id="send">Send</button>
  </form>
</div>
<div id="results">
  <h2>Here are some recommendations for you</h2>
  <div id="grid"><p style="opacity:.4">Start a chat to get recommendations</p></div>
</div>
<script>
let sessionId = null, speak = false, busy = false;
const log = document.getElementById('log'), q = document.getElementById('q');
function bubble(role, text){const d=document.createElement('div');d.className='msg '+role;d.textContent=text;log.appendChild(d);log.scrollTop=log.scrollHeight;}
function esc(s){const d=document.createElement('div');d.textContent=s==null?'':String(s);return d.innerHTML;}
function render(cards){
  if(!cards.length) return;
  document.getElementById('grid').innerHTML = cards.map(c => `
    <div class="card" style="background:linear-gradient(to bottom right,${c.gradient[0]},${c.gradient[1]})">
      ${c.source ? `<span class="badge">${esc(c.source)}</span>` : ''}
      <h3 title="Click to copy title" onclick="navigator.clipboard.writeText(this.textContent)">${esc(c.title)}</h3>
      <div class="meta"><span>${esc(c.year)}</span><span>&bull;</span><span>${esc(c.country)}</span><span class="score">${c.match_score}% Match</span></div>
      ${c.description ? `<p class="desc">${esc(c.description)}</p>` : ''}
      <div>${c.genres.map(g => `<span class="tag">${esc(g)}</span>`).join('')}</div>
      <p><a href="${c.search_url}" target="_blank"><button type="button">Google Search</button></a></p>
    </div>`).join('');
}
async function send(text){
  if(busy || !text.trim()) return;
  busy = true; document.getElementById('send').disabled = true;
  bubble('user', text); q.value = '';
  try{
    const r = await fetch('/api/chat',{method:'POST',headers:{'Content-Type':'application/json'},body:JSON.stringify({query:text,session_id:sessionId})});
    const data = await r.json();
    sessionId = data.session_id; bubble('assistant', data.reply); render(data.recommendations);
    if(speak && window.speechSynthesis){speechSynthesis.cancel();speechSynthesis.speak(new SpeechSynthesisUtterance(data.reply));}
  }catch(e){console.error(e);bubble('assistant','Sorry, I ran into an error connecting to the server.');}
  finally{busy = false; document.getElementById('send').disabled = false;}
}
bubble('assistant', "Hi! What are you in the mood for today? Tell me about a movie or series you like, and I'll find your next favorite.");
document.getElementById('form').onsubmit = e => {e.preventDefault(); send(q.value);};
document.getElementById('tts').onclick = () => {speak = !speak; if(!speak && window.speechSynthesis) speechSynthesis.cancel();};
document.getElementById('mic').onclick = () => {
  const SR = window.SpeechRecognition || window.webkitSpeechRecognition;
  if(!SR) return;
  const rec = new SR(); rec.lang = 'en-US';
  rec.onresult = ev => send(ev.results[0][0].transcript);
  rec.start();
};
</script>
</body></html>"""
