# ABOUTME: Roadmap generation telemetry: one JSON line per Gemini call on stdout.
# ABOUTME: Cost is looked up per model; models without a price entry log a null cost.

import json
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

# USD per 1M tokens: (input, output). Standard tier, prompts under 200k tokens.
MODEL_PRICING_PER_1M = {
    "gemini-2.5-pro": (1.25, 10.00),
    "gemini-2.5-flash": (0.30, 2.50),
    "gemini-2.5-flash-lite": (0.10, 0.40),
    "gemini-2.0-flash": (0.10, 0.40),
    "gemini-2.0-flash-lite": (0.075, 0.30),
    "gemini-1.5-flash": (0.075, 0.30),
}


def estimate_cost_usd(model: str, prompt_tokens: int, completion_tokens: int) -> float | None:
    """Estimated USD cost of one call, or None when the model has no known price."""
    pricing = MODEL_PRICING_PER_1M.get(model)
    if pricing is None:
        return None
    input_per_1m, output_per_1m = pricing
    return (prompt_tokens * input_per_1m + completion_tokens * output_per_1m) / 1_000_000


@dataclass
class TelemetryLogEntry:
    timestamp: str
    model: str
    latency_ms: float
    prompt_chars: int
    prompt_tokens: int
    completion_tokens: int
    estimated_cost_usd: float | None
    step_count: int | None
    resource_count: int | None
    success: bool

    def to_json(self) -> str:
        entry = asdict(self)
        entry["latency_ms"] = round(self.latency_ms, 2)
        if self.estimated_cost_usd is not None:
            entry["estimated_cost_usd"] = round(self.estimated_cost_usd, 6)
        return json.dumps(entry)


def log_run(
    *,
    model: str,
    latency_ms: float,
    prompt_chars: int,
    prompt_tokens: int,
    completion_tokens: int,
    step_count: int | None,
    resource_count: int | None,
    success: bool,
) -> None:
    """Print the telemetry line for one roadmap generation; counts are None when parsing failed."""
    entry = TelemetryLogEntry(
        timestamp=datetime.now(tz=timezone.utc).isoformat(),
        model=model,
        latency_ms=latency_ms,
        prompt_chars=prompt_chars,
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
        estimated_cost_usd=estimate_cost_usd(model, prompt_tokens, completion_tokens),
        step_count=step_count,
        resource_count=resource_count,
        success=success,
    )
    print(entry.to_json(), flush=True)
