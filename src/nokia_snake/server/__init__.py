"""HTTP/WebSocket adapter serving Nokia Snake sessions to browsers."""
