"""GlobalOnboard: multilingual onboarding preview service."""
