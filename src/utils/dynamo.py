"""
DynamoDB utility functions for user and session storage.

All CycleCare data lives in a single table keyed by ``PK``/``SK``:

    USER#<email>  / PROFILE   -> user document with embedded cycle profile
    SESSION       / CURRENT   -> pointer to the signed-in user
"""
import os
from typing import Dict, Optional, Any
import boto3

# Singleton instance
_dynamo_instance = None

def get_dynamo() -> 'DynamoDBClient':
    """
    Get or create the shared DynamoDB client.

    The table name is read from CYCLECARE_TABLE_NAME the first time this is
    called.

    Returns:
        DynamoDBClient: Shared client instance

    Raises:
        EnvironmentError: If CYCLECARE_TABLE_NAME is not set
    """
    global _dynamo_instance
    if _dynamo_instance is None:
        try:
            table_name = os.environ['CYCLECARE_TABLE_NAME']
        except KeyError:
            raise EnvironmentError(
                "CYCLECARE_TABLE_NAME environment variable not set. "
                "This variable must be set to the DynamoDB table name."
            )
        _dynamo_instance = DynamoDBClient(table_name)
    return _dynamo_instance

def reset_dynamo() -> None:
    """Drop the shared client so the next call re-reads the environment."""
    global _dynamo_instance
    _dynamo_instance = None

class DynamoDBClient:
    """Client for reading and writing items of the CycleCare table."""

    def __init__(self, table_name: str, resource=None):
        self.dynamodb = resource or boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)

    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Write a full item, replacing any item with the same key.

        Args:
            item: Item attributes including PK and SK

        Returns:
            Response from DynamoDB
        """
        return self.table.put_item(Item=item)

    def get_item(self, key: Dict[str, str]) -> Optional[Dict[str, Any]]:
        """
        Read a single item.

        Args:
            key: PK and SK of the item

        Returns:
            Item if found, None otherwise
        """
        response = self.table.get_item(Key=key)
        return response.get('Item')

    def delete_item(self, key: Dict[str, str]) -> Dict[str, Any]:
        """
        Delete a single item. Deleting a missing item is not an error.

        Args:
            key: PK and SK of the item

        Returns:
            Response from DynamoDB
        """
        return self.table.delete_item(Key=key)

def create_user_pk(email: str) -> str:
    """Create partition key from a user's email address."""
    return f"USER#{email.strip().lower()}"

def create_profile_sk() -> str:
    """Create sort key for the user document."""
    return "PROFILE"

def create_session_key() -> Dict[str, str]:
    """Create the key of the active session pointer."""
    return {"PK": "SESSION", "SK": "CURRENT"}
