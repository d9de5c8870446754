"""Developer onboarding: configure NODE_ENV, Google Cloud, Firebase and Font Awesome."""
