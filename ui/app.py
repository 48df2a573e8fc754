from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import HTMLResponse

from goalbar import (
    AppController,
    AsyncioScheduler,
    Event,
    available_locales,
    configure_logging,
    goal_type_choices,
    language_choices,
    load_settings,
)
from goalbar.i18n import resources

logger = logging.getLogger(__name__)


# ── Lifespan ──────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = load_settings()
    configure_logging(settings.log_level)
    # timers must live on the serving loop, so the controller is built here
    controller = AppController(settings, AsyncioScheduler())
    controller.start()
    app.state.controller = controller
    logger.info("GoalBar session started (goal=%s, type=%s)", controller.snapshot.goal, controller.snapshot.type.value)
    try:
        yield
    finally:
        controller.close()
        logger.info("GoalBar session closed")


app = FastAPI(title="GoalBar UI", version="0.1.0", lifespan=lifespan)


def get_controller(request: Request) -> AppController:
    return request.app.state.controller


def _respond(controller: AppController, events: list[Event]) -> dict[str, Any]:
    return {
        "events": [e.to_dict() for e in events],
        "state": controller.snapshot.to_dict(),
        "label": controller.label(),
    }


# ── HTML helpers ──────────────────────────────────────────────


def _escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


# ── Endpoints ─────────────────────────────────────────────────


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/api/state")
async def api_state(controller: AppController = Depends(get_controller)) -> dict[str, Any]:
    return _respond(controller, [])


@app.get("/api/i18n/{locale}")
async def api_i18n(locale: str) -> dict[str, str]:
    code = locale.strip().replace("_", "-").split("-")[0].lower()
    if code not in available_locales():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown locale: {locale}")
    return dict(resources(code))


@app.post("/api/goal")
async def api_goal(
    payload: dict[str, Any] = Body(...),
    controller: AppController = Depends(get_controller),
) -> dict[str, Any]:
    return _respond(controller, controller.set_goal(payload.get("value")))


@app.post("/api/type")
async def api_type(
    payload: dict[str, Any] = Body(...),
    controller: AppController = Depends(get_controller),
) -> dict[str, Any]:
    return _respond(controller, controller.set_type(payload.get("value")))


@app.post("/api/locale")
async def api_locale(
    payload: dict[str, Any] = Body(...),
    controller: AppController = Depends(get_controller),
) -> dict[str, Any]:
    return _respond(controller, controller.set_locale(payload.get("value")))


@app.post("/api/pending")
async def api_pending(
    payload: dict[str, Any] = Body(...),
    controller: AppController = Depends(get_controller),
) -> dict[str, Any]:
    return _respond(controller, controller.set_pending_amount(payload.get("value")))


@app.post("/api/commit")
async def api_commit(controller: AppController = Depends(get_controller)) -> dict[str, Any]:
    return _respond(controller, controller.commit_increment())


@app.post("/api/reset/request")
async def api_reset_request(controller: AppController = Depends(get_controller)) -> dict[str, Any]:
    return _respond(controller, controller.request_reset())


@app.post("/api/reset/confirm")
async def api_reset_confirm(controller: AppController = Depends(get_controller)) -> dict[str, Any]:
    return _respond(controller, controller.confirm_reset())


@app.post("/api/reset/cancel")
async def api_reset_cancel(controller: AppController = Depends(get_controller)) -> dict[str, Any]:
    return _respond(controller, controller.cancel_reset())


@app.get("/", response_class=HTMLResponse)
async def index(controller: AppController = Depends(get_controller)) -> HTMLResponse:
    snap = controller.snapshot
    t = controller.translate

    type_options = "".join(
        f'<option value="{gt.value}"{" selected" if gt is snap.type else ""}>{_escape(label)}</option>'
        for label, gt in goal_type_choices(snap.locale)
    )
    lang_options = "".join(
        f'<option value="{code}"{" selected" if code == snap.locale else ""}>{_escape(name)}</option>'
        for name, code in language_choices()
    )
    texts = {code: resources(code) for code in available_locales()}

    html = f"""<!doctype html>
<html lang="{snap.locale}">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{_escape(t("title"))}</title>
  <style>
    body {{ background: #10141a; color: #eafcff; font-family: 'Space Grotesk', 'Inter', Arial, sans-serif; }}
    main {{ max-width: 350px; margin: 2rem auto; padding: 1rem; background: #181d23; opacity: 0; transition: opacity .2s; }}
    main.entered {{ opacity: 1; }}
    main.add-anim {{ box-shadow: 0 0 0 6px #00eaff55; }}
    main.complete-anim {{ box-shadow: 0 0 0 12px #00eaff99; }}
    main.reset-anim {{ animation: shake .5s; }}
    @keyframes shake {{ 25% {{ transform: translateX(-6px); }} 75% {{ transform: translateX(6px); }} }}
    .bar {{ position: relative; height: 38px; border: 2.5px solid #00eaff; background: #10141a; }}
    .fill {{ position: absolute; inset: 0 auto 0 0; background: linear-gradient(90deg, #00eaff 60%, #fff 100%); transition: width .7s; }}
    .label {{ position: absolute; inset: 0; display: flex; align-items: center; justify-content: center; font-weight: 700; }}
    input, select, button {{ width: 100%; box-sizing: border-box; margin: .2rem 0; }}
    #confirm {{ display: none; }}
    #confirm.visible {{ display: block; }}
  </style>
</head>
<body>
  <details>
    <summary data-t="openMenu">{_escape(t("openMenu"))}</summary>
    <label data-t="goal">{_escape(t("goal"))}</label>
    <input id="goal" type="number" min="1" value="{snap.goal:g}" />
    <label data-t="changeType">{_escape(t("changeType"))}</label>
    <select id="type">{type_options}</select>
    <label data-t="language">{_escape(t("language"))}</label>
    <select id="locale">{lang_options}</select>
  </details>
  <main id="main">
    <h1 data-t="title">{_escape(t("title"))}</h1>
    <div class="bar"><div class="fill" id="fill" style="width:{snap.percent}%"></div><div class="label" id="label">{_escape(controller.label())}</div></div>
    <input id="pending" type="number" step="{snap.min_unit:g}" min="{snap.min_unit:g}" max="{snap.max_pending:g}" />
    <button id="add" data-t="addProcess">{_escape(t("addProcess"))}</button>
    <button id="reset" data-t="resetProgress">{_escape(t("resetProgress"))}</button>
    <div id="confirm">
      <p data-t="confirmReset">{_escape(t("confirmReset"))}</p>
      <button id="yes" data-t="yes">{_escape(t("yes"))}</button>
      <button id="no" data-t="no">{_escape(t("no"))}</button>
    </div>
  </main>
  <script>
    const TEXTS = {json.dumps(texts, ensure_ascii=False)};
    const $ = (id) => document.getElementById(id);
    function render(data) {{
      const s = data.state, f = s.animationFlags;
      $('fill').style.width = s.percent + '%';
      $('label').textContent = data.label;
      $('main').classList.toggle('entered', f.entryRevealed);
      $('main').classList.toggle('add-anim', f.addPulseActive);
      $('main').classList.toggle('complete-anim', f.completePulseActive);
      $('main').classList.toggle('reset-anim', f.resetShakeActive);
      $('confirm').classList.toggle('visible', s.resetFlowState === 'awaiting_confirmation');
      $('pending').max = s.maxPending;
      $('pending').step = s.minUnit;
      $('pending').min = s.minUnit;
      document.querySelectorAll('[data-t]').forEach((el) => {{
        el.textContent = (TEXTS[s.locale] || TEXTS.en)[el.dataset.t] || el.dataset.t;
      }});
    }}
    async function send(path, value) {{
      const opts = {{ method: 'POST', headers: {{ 'Content-Type': 'application/json' }} }};
      if (value !== undefined) opts.body = JSON.stringify({{ value }});
      const res = await fetch(path, opts);
      render(await res.json());
    }}
    async function poll() {{
      const res = await fetch('/api/state');
      render(await res.json());
    }}
    $('goal').addEventListener('change', (e) => send('/api/goal', e.target.value));
    $('type').addEventListener('change', (e) => {{ $('pending').value = ''; send('/api/type', e.target.value); }});
    $('locale').addEventListener('change', (e) => send('/api/locale', e.target.value));
    $('pending').addEventListener('input', (e) => send('/api/pending', e.target.value));
    $('add').addEventListener('click', async () => {{ await send('/api/commit'); $('pending').value = ''; }});
    $('reset').addEventListener('click', () => send('/api/reset/request'));
    $('yes').addEventListener('click', () => send('/api/reset/confirm'));
    $('no').addEventListener('click', () => send('/api/reset/cancel'));
    setInterval(poll, 150);
  </script>
</body>
</html>
"""
    return HTMLResponse(html)
