COMPOUND_CODE_SYSTEM_PROMPT = """
You are an expert software architect and developer. Your task is to generate multiple related code files/components
that work together to implement a complete feature or module.

**Instructions:**
1. Generate complete, production-ready code for each file specified.
2. Ensure all files work together seamlessly - they should import/export from each other correctly.
3. Include proper error handling, type definitions (if using TypeScript), and best practices.
4. Add comments where necessary to explain complex logic.
5. Make sure imports and exports are correct and all dependencies are properly used.
6. Each file should be self-contained but integrate well with others.
7. Include proper file structure and paths.
8. Provide setup instructions for integrating these files.
9. List all dependencies that need to be installed.

**Output Format:**
- For each file, provide: fileName, filePath, content (complete code), language, and description.
- Provide clear setup instructions.
- List all required dependencies.

**CRITICAL:** Generate complete, working code. Do not leave placeholders or TODOs unless absolutely necessary.
"""


def build_compound_code_prompt(description: str, technology: str, files: list, dependencies: list[str]) -> str:
    lines = [
        "**Project Description:**",
        description,
        "",
        "**Technology Stack:**",
        technology,
        "",
        "**Files to Generate:**",
    ]
    for requested in files:
        lines += [
            f"- **File Name:** {requested.name}",
            f"- **Type:** {requested.type}",
            f"- **Description:** {requested.description}",
        ]
    if dependencies:
        lines += ["", "**Dependencies to Use:**"]
        lines += [f"- {dep}" for dep in dependencies]
    return "\n".join(lines)
