"""
Getting Started with SheetQL

This example shows the basics of using SheetQL to infer a GraphQL API
from spreadsheet-like rows.
"""

from sheetql import SheetQL


def create_sample_workbook():
    """A workbook with two sheets, cells as a spreadsheet parser returns them."""
    return {
        "employees": [
            {"id": "1", "name": "Alice Johnson", "departmentId": "10", "salary": "95000", "remote": "1"},
            {"id": "2", "name": "Bob Smith", "departmentId": "20", "salary": "75000", "remote": "0"},
            {"id": "3", "name": "Charlie Brown", "departmentId": "10", "salary": "105000", "remote": ""},
            {"id": "4", "name": "Diana Martinez", "departmentId": "30", "salary": "65000", "remote": "1"},
        ],
        "departments": [
            {"id": "10", "name": "Engineering"},
            {"id": "20", "name": "Sales"},
            {"id": "30", "name": "HR"},
        ],
    }


def main():
    """Basic SheetQL usage example."""
    print("📊 Getting Started with SheetQL\n")

    server = SheetQL({"company": create_sample_workbook()})

    print("✅ GraphQL API created!")
    print("\nInferred schema:\n")
    print(server.print_schema())

    print("\n1. Employees sorted by name, with their department:")
    data = server.query("""
    {
      company {
        employees(sort: "name", limit: 3) {
          name
          salary
          department { name }
        }
      }
    }
    """)
    for employee in data["company"]["employees"]:
        print(f"   - {employee['name']} ({employee['department']['name']}): {employee['salary']}")

    print("\n2. Look up a single employee by name:")
    data = server.query('{ company { employee(name: "Bob Smith") { id remote } } }')
    print(f"   {data['company']['employee']}")


if __name__ == "__main__":
    main()
