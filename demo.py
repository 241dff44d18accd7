"""
small walkthrough of the harness: binds the registration functions into this
module's globals and runs a few groups, one of them failing on purpose.
"""
import logging

from tester import Tester, HarnessConfig

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(message)s')

Tester.setup(globals(), config=HarnessConfig(label_top_groups=True, show_summary=True))

print_header("inventory")


def inventory_specs():
    stock = {'apples': 3, 'pears': 0, 'tags': ['fresh', 'local']}

    it("counts apples", lambda: expect(stock['apples']).to_be_greater_than(0))
    it("knows pears ran out", lambda: expect(stock['pears']).to_be_falsy())

    def tags():
        it("labels fresh produce", lambda: expect(stock['tags']).to_contain('fresh'))
        it("matches the expected record", lambda: expect(stock).to_equal_object(
            {'apples': 3, 'pears': 1, 'tags': ['fresh', 'local']}))

    context("tags", tags)


def parsing_specs():
    it("rejects text", lambda: expect(lambda: int("three")).to_throw_error(
        "invalid literal for int() with base 10: 'three'"))
    it("accepts digits", lambda: expect(int("3")).not_.to_be(None))


describe("Inventory", inventory_specs)
describe("Parsing", parsing_specs)

if __name__ == "__main__":
    run()
