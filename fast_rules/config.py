# PHP namespace of generated FormRequest classes
DEFAULT_NAMESPACE = "Generated\\Http\\{service-name}\\Requests"

# Class name per operation
DEFAULT_CLASS_NAME = "{operation-id}Request"

# Output file, relative to the output directory
DEFAULT_OUTPUT_FILE = "generated/Http/{service-name}/Requests/{class-name}.php"

# Base class the generated requests extend
DEFAULT_BASE_CLASS = "\\Illuminate\\Foundation\\Http\\FormRequest"

# Environment variables overriding the defaults above
OPTION_ENV_VARS = {
    "namespace": "RULES_NAMESPACE",
    "class-name": "RULES_CLASS_NAME",
    "output-file": "RULES_OUTPUT_FILE",
    "base-class": "RULES_BASE_CLASS",
}

# Directory generated files are written under
OUTPUT_DIR_ENV_VAR = "RULES_OUTPUT_DIR"
DEFAULT_OUTPUT_DIR = "."
