"""HTTP API for the donor lookup and politician roster."""
