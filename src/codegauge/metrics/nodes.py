"""Syntax node types the metrics count, shared by the TypeScript, TSX and
JavaScript grammars."""

# Each counts as one branch; `else if` is an if_statement inside an else_clause.
BRANCH_TYPES = frozenset(
    {
        "if_statement",
        "for_statement",
        "for_in_statement",
        "while_statement",
        "do_statement",
        "switch_statement",
    }
)

COMMENT_TYPES = frozenset({"comment", "html_comment"})

# Always declarations.
DECLARATION_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "method_definition",
    }
)

# Declarations only when bound to a name (`const f = () => {}`).
FUNCTION_EXPRESSION_TYPES = frozenset(
    {
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
    }
)

FUNCTION_TYPES = DECLARATION_TYPES | FUNCTION_EXPRESSION_TYPES

BINDING_PARENT_TYPES = frozenset({"variable_declarator"})

# Normalized as a single token so their inner layout does not matter.
ATOMIC_TOKEN_TYPES = frozenset({"string", "template_string", "regex"})

BODY_TYPE = "statement_block"
