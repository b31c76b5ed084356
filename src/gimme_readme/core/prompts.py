"""Built-in instruction used when the operator supplies no prompt."""

DEFAULT_PROMPT = """\
You are a senior technical writer. Using the source files provided below, \
write a clear, well-structured README.md in Markdown for this project.

The README must:
- Start with the project name as a top-level heading and a one-paragraph summary \
of what the project does and why it exists.
- Describe the main features, the overall structure and how the pieces fit together.
- Explain how to install, configure and run the project, including any \
environment variables, configuration files or command-line options you can \
infer from the code.
- Document the public functions, classes or commands with short usage examples.
- Note requirements and dependencies that can be inferred from the files.

Only describe behaviour that is supported by the provided files; do not invent \
features. Respond with the Markdown content only.

Here are the files:

"""
