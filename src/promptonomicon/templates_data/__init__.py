# ABOUTME: Bundled copies of the Promptonomicon templates
# ABOUTME: Used when raw.githubusercontent.com is unreachable or offline mode is set
