"""Terminal output, prompts, progress display and pull request content generation."""