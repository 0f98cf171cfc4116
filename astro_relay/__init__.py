"""AstroOne realtime relay: browser voice clients <-> OpenAI Realtime."""
