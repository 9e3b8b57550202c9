import unittest
from pathlib import Path

from sca.libs.build.sourcesets import AndroidSourceSet, Configuration, NamedDomainObjectContainer, SourceSet


class TestNamedDomainObjectContainer(unittest.TestCase):
    def setUp(self):
        self.container = NamedDomainObjectContainer(SourceSet)

    def test_all_sees_existing_and_future_elements(self):
        seen = []
        self.container.create('main')

        self.container.all(lambda s: seen.append(s.name))
        self.container.create('test')

        self.assertEqual(seen, ['main', 'test'])

    def test_when_object_added_only_sees_future_elements(self):
        seen = []
        self.container.create('main')

        self.container.when_object_added(lambda s: seen.append(s.name))
        self.container.create('debug')

        self.assertEqual(seen, ['debug'])

    def test_element_added_by_a_listener(self):
        seen = []

        def listener(source_set):
            seen.append(source_set.name)
            if source_set.name == 'main':
                self.container.maybe_create('test')

        self.container.create('main')
        self.container.all(listener)

        self.assertEqual(seen, ['main', 'test'])

    def test_maybe_create(self):
        main = self.container.maybe_create('main')

        self.assertIs(self.container.maybe_create('main'), main)
        self.assertEqual(len(self.container), 1)

    def test_create_duplicate(self):
        self.container.create('main')

        with self.assertRaises(ValueError):
            self.container.create('main')

    def test_add_duplicate(self):
        self.assertTrue(self.container.add(SourceSet('main')))
        self.assertFalse(self.container.add(SourceSet('main')))

    def test_custom_namer(self):
        container = NamedDomainObjectContainer(str, namer=lambda s: s.upper())
        container.add('main')

        self.assertIn('MAIN', container)
        self.assertEqual(container.names, ['MAIN'])


class TestConfiguration(unittest.TestCase):
    def test_files_include_parents(self):
        compile = Configuration('compile', [Path('a.jar'), Path('b.jar')])
        debug = Configuration('debugCompile', [Path('b.jar'), Path('c.jar')], extends_from=[compile])

        self.assertEqual(debug.files, [Path('a.jar'), Path('b.jar'), Path('c.jar')])


class TestConventions(unittest.TestCase):
    def test_source_set(self):
        source_set = SourceSet.conventional(Path('/app'), Path('/app/build'), 'test')

        self.assertEqual(source_set.java_src_dirs, [Path('/app/src/test/java')])
        self.assertEqual(source_set.output_dirs, [Path('/app/build/classes/java/test')])

    def test_android_source_set(self):
        self.assertEqual(AndroidSourceSet.conventional(Path('/app'), 'main').package_configuration_name, 'compile')
        self.assertEqual(
            AndroidSourceSet.conventional(Path('/app'), 'debug').package_configuration_name, 'debugCompile'
        )
