"""
Core application engine for orchestrating the batch.

The `BatchRunner` walks the link list and hands each valid link to the
`AudioExtractor`, collecting the outcomes into a `RunSummary`.
"""
