from django import forms

from .exceptions import TypeMismatchError


class InteractiveForm(forms.Form):
    """
    Form for the interactive parameters of one rendered view. Each control
    contributes its field; the initial values are the values the provider
    declared.
    """

    def __init__(self, controls, data=None, **kwargs):
        self.controls = {control.name: control for control in controls}
        initial = {name: control.value for name, control in self.controls.items()}
        initial.update(kwargs.pop("initial", None) or {})
        super().__init__(data=data, initial=initial, **kwargs)
        # one field instance per form.
        self.fields.update(
            {
                name: control.get_form_field()
                for name, control in self.controls.items()
            }
        )

    def updates(self):
        """
        Return the changed values of a bound form. Invalid input is
        reported as a type mismatch on the first offending field.
        """
        if not self.is_valid():
            name, errors = next(iter(self.errors.items()))
            control = self.controls.get(name)
            expected = control.descriptor.kind.value if control else "valid input"
            raise TypeMismatchError(
                name,
                expected,
                self.data.get(name),
                f"{name}: {' '.join(str(e) for e in errors)}",
            )
        updates = {}
        for name in self.changed_data:
            # unchecked checkboxes are left out of submitted data.
            submitted = name in self.data or isinstance(
                self.fields[name].widget, forms.CheckboxInput
            )
            if submitted and self.cleaned_data[name] is not None:
                updates[name] = self.cleaned_data[name]
        return updates
