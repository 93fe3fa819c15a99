import os, time
from flask import Flask, request, jsonify
from werkzeug.exceptions import BadRequest
from bigprime import BITS, WITNESSES, BigInt4096, BigPrimeError, MalformedNumericParse, Mode, mod_exp, is_prime, run_task

MAX_TIMEOUT_MS = int(os.getenv("PRIMES_MAX_TIMEOUT_MS", "10000"))
MAX_LIST       = int(os.getenv("PRIMES_MAX_LIST", "10000"))
HOST           = os.getenv("HOST", "0.0.0.0")
PORT           = int(os.getenv("PORT", "8080"))

app = Flask(__name__)

@app.errorhandler(BadRequest)
def _bad_request(e):
    return jsonify({"ok": False, "error": e.description}), 400

# ------------------ helpers ------------------
def _number(raw, name: str) -> BigInt4096:
    if raw is None:
        raise BadRequest(f"missing {name}")
    try:
        return BigInt4096.parse(str(raw))
    except MalformedNumericParse as e:
        raise BadRequest(f"{name} must be a decimal integer ({e.reason})")

def _small_int(raw, name: str, default: int, lo: int, hi: int) -> int:
    if raw is None or str(raw).strip() == "":
        return default
    try:
        v = int(str(raw).strip())
    except ValueError:
        raise BadRequest(f"{name} must be integer")
    if not lo <= v <= hi:
        raise BadRequest(f"{name} must be in {lo}..{hi}")
    return v

# ------------------ API ------------------
@app.get("/api/health")
def health():
    return jsonify({"ok": True, "bits": BITS, "witnesses": list(WITNESSES), "time": int(time.time())})

# /api/isprime?n=97&rounds=5
@app.get("/api/isprime")
def api_isprime():
    n = _number(request.args.get("n"), "n")
    rounds = _small_int(request.args.get("rounds"), "rounds", len(WITNESSES), 0, len(WITNESSES))
    t0 = time.perf_counter()
    prime = is_prime(n, rounds)
    dt_ms = int((time.perf_counter() - t0) * 1000)
    return jsonify({"ok": True, "n": str(n), "prime": prime, "rounds": rounds, "duration_ms": dt_ms})

# /api/modexp?base=4&exp=13&mod=497
@app.get("/api/modexp")
def api_modexp():
    base = _number(request.args.get("base"), "base")
    exp = _number(request.args.get("exp"), "exp")
    mod = _number(request.args.get("mod"), "mod")
    t0 = time.perf_counter()
    try:
        result = mod_exp(base, exp, mod)
    except BigPrimeError as e:
        raise BadRequest(str(e))
    dt_ms = int((time.perf_counter() - t0) * 1000)
    return jsonify({"ok": True, "result": str(result), "duration_ms": dt_ms})

# /api/divmod?a=17&b=5
@app.get("/api/divmod")
def api_divmod():
    a = _number(request.args.get("a"), "a")
    b = _number(request.args.get("b"), "b")
    try:
        q, r = divmod(a, b)
    except BigPrimeError as e:
        raise BadRequest(str(e))
    return jsonify({"ok": True, "quotient": str(q), "remainder": str(r)})

@app.post("/api/task")
def api_task():
    data = request.get_json(silent=True) or {}
    try:
        mode = Mode(str(data.get("mode", "")).strip())
    except ValueError:
        raise BadRequest("mode must be one of: nth, le, all")
    n = _number(data.get("n"), "n")
    if mode is Mode.NTH and not n:
        raise BadRequest("n must be >= 1 for mode nth")
    timeout_ms = _small_int(data.get("timeout_ms"), "timeout_ms", 0, 0, 10**9)
    # 0 or anything above the cap runs under the cap
    if timeout_ms == 0 or timeout_ms > MAX_TIMEOUT_MS:
        timeout_ms = MAX_TIMEOUT_MS
    rounds = _small_int(data.get("rounds"), "rounds", len(WITNESSES), 0, len(WITNESSES))

    res = run_task(mode, n, timeout_s=timeout_ms / 1000.0, rounds=rounds)
    out = {"ok": True, "timeout_ms": timeout_ms}
    out.update(res.to_dict())
    if mode is Mode.ALL and len(out["primes"]) > MAX_LIST:
        out["primes"] = out["primes"][:MAX_LIST]
        out["truncated"] = True
    return jsonify(out)

if __name__ == "__main__":
    app.run(host=HOST, port=PORT)
