"""Personal finance tracker: transaction ledger, budget summaries, onboarding, and HTTP boundary."""
