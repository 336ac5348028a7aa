import os
import xml.etree.ElementTree as ET

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')


def get_data(*paths):
    return os.path.join(DATA_DIR, *paths)


class MockConnection:
    """
    stands in for the NCBI connection. Every search finds the given records and records the
    search terms sent
    """

    def __init__(self, response_file=None):
        self.root = ET.parse(response_file).getroot() if response_file else None
        self.searches = []
        self.fetches = 0

    def search(self, table, term, retmax):
        self.searches.append((table, term, retmax))
        if self.root is None:
            return {'Count': '0', 'RetMax': '0', 'IdList': []}
        return {'Count': str(retmax), 'QueryKey': '1', 'WebEnv': 'MOCK_WEBENV'}

    def fetch(self, table, search_result):
        self.fetches += 1
        return self.root
