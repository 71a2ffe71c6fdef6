SQL_TOOL_NAME = "generate_sql_query"

SCHEMA_DESCRIPTION = """Available tables and schema:
- customers: id (INTEGER), name (TEXT), email (TEXT), total_spent (REAL), created_at (TEXT)
- orders: id (INTEGER), customer_id (INTEGER), amount (REAL), order_date (TEXT), status (TEXT)"""

SQL_GENERATOR_TOOL = {
    "type": "function",
    "function": {
        "name": SQL_TOOL_NAME,
        "description": (
            "Generates a SQL query based on user's natural language request.\n\n"
            f"{SCHEMA_DESCRIPTION}\n\n"
            "Generate proper SQLite syntax for SELECT queries."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "The SQL SELECT query in proper SQLite syntax",
                },
                "explanation": {
                    "type": "string",
                    "description": "Brief explanation of what this query does",
                },
            },
            "required": ["query", "explanation"],
        },
    },
}
